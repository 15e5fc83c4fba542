"""
Service module for next period predictions.

This module runs the full inference chain over a snapshot of entries:
bleeding days are grouped into periods, the intervals between period starts
are summarized, and the next start is projected from the last period and the
average cycle length. Every degraded input yields a status value rather than
an exception, so the prediction can be rendered from background refreshes.

Typical usage:
    result = predict(store.list(), today=date.today())
    if result.has_projection:
        print(f"Next period expected on {result.predicted_start}")
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional

from aws_lambda_powertools import Logger

from src.models.entry import SymptomEntry
from src.models.period import Period
from src.models.prediction import CycleStatistics, PredictionResult, PredictionStatus
from src.services.entry_store import EntryStore
from src.services.periods import segment_periods
from src.services.statistics import calculate_cycle_statistics
from src.services.utils import days_between, get_bleeding_entries

logger = Logger()


def project_next_start(
    periods: List[Period],
    stats: CycleStatistics,
    today: date
) -> PredictionResult:
    """
    Project the next period start and classify it relative to today.

    Args:
        periods: At least two periods in chronological order
        stats: Statistics computed from the same periods
        today: Reference date

    Returns:
        PredictionResult with status UPCOMING, DUE_TODAY or OVERDUE
    """
    last_start = periods[-1].start
    predicted_start = last_start + timedelta(days=stats.average_cycle)
    days_until = days_between(today, predicted_start)

    if days_until > 0:
        status = PredictionStatus.UPCOMING
    elif days_until == 0:
        status = PredictionStatus.DUE_TODAY
    else:
        status = PredictionStatus.OVERDUE

    return PredictionResult(
        status=status,
        today=today,
        period_count=stats.period_count,
        interval_count=stats.interval_count,
        last_period_start=last_start,
        predicted_start=predicted_start,
        days=abs(days_until),
        average_cycle=stats.average_cycle,
        min_cycle=stats.min_cycle,
        max_cycle=stats.max_cycle,
        high_variability=stats.high_variability
    )


def predict(entries: Iterable[SymptomEntry], today: Optional[date] = None) -> PredictionResult:
    """
    Predict the next period start from a snapshot of entries.

    Args:
        entries: Entries in any order, one per date
        today: Reference date, defaults to the current local date

    Returns:
        PredictionResult in one of these states:
        - NO_DATA: no entries at all
        - NO_PERIOD_DATA: entries exist but none has bleeding
        - INSUFFICIENT_DATA: fewer than two periods (period count and the
          last period start are still reported)
        - UPCOMING / DUE_TODAY / OVERDUE: a projection

    Example:
        >>> result = predict(entries, today=date(2024, 2, 20))
        >>> if result.status == PredictionStatus.OVERDUE:
        ...     print(f"{result.days} days overdue")
    """
    if today is None:
        today = date.today()
    entries = list(entries)

    if not entries:
        return PredictionResult(status=PredictionStatus.NO_DATA, today=today)

    bleeding_entries = get_bleeding_entries(entries)
    if not bleeding_entries:
        return PredictionResult(status=PredictionStatus.NO_PERIOD_DATA, today=today)

    periods = segment_periods(bleeding_entries)
    stats = calculate_cycle_statistics(periods)
    if stats is None:
        return PredictionResult(
            status=PredictionStatus.INSUFFICIENT_DATA,
            today=today,
            period_count=len(periods),
            last_period_start=periods[-1].start
        )

    result = project_next_start(periods, stats, today)
    logger.info("Predicted next period", extra={
        "status": result.status.value,
        "predicted_start": str(result.predicted_start),
        "days": result.days,
        "high_variability": result.high_variability
    })
    return result


def predict_from_store(store: EntryStore, today: Optional[date] = None) -> PredictionResult:
    """Predict from the store's current snapshot."""
    return predict(store.list(), today=today)
