"""
Statistics calculation service for cycle tracking data.

This module computes the intervals between consecutive period starts and
summarizes them into the figures the predictor projects from.
"""
from decimal import Decimal, ROUND_HALF_UP
from statistics import mean
from typing import List, Optional

from aws_lambda_powertools import Logger

from src.models.period import Period
from src.models.prediction import CycleStatistics
from src.services.constants import HIGH_VARIABILITY_THRESHOLD_DAYS, MIN_PERIODS_FOR_PREDICTION
from src.services.utils import days_between

logger = Logger()


def round_half_up(numerator: int, denominator: int) -> int:
    """
    Round ``numerator / denominator`` to the nearest integer, ties upwards.

    Python's ``round`` sends ties to the even neighbour (28.5 -> 28); cycle
    averages round ties up instead (28.5 -> 29). Exact decimal arithmetic
    keeps float error from deciding the tie.
    """
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_cycle_intervals(periods: List[Period]) -> List[int]:
    """
    Calculate days between the starts of consecutive periods.

    Args:
        periods: Periods in chronological order

    Returns:
        One interval per pair of consecutive periods
    """
    return [
        days_between(previous.start, current.start)
        for previous, current in zip(periods, periods[1:])
    ]


def calculate_cycle_statistics(periods: List[Period]) -> Optional[CycleStatistics]:
    """
    Calculate cycle length statistics from ordered periods.

    Args:
        periods: Periods in chronological order

    Returns:
        CycleStatistics, or None when fewer than two periods are available
        (the caller reports that as insufficient data)

    Example:
        >>> stats = calculate_cycle_statistics(periods)
        >>> if stats and stats.high_variability:
        ...     print("Prediction less reliable")
    """
    if len(periods) < MIN_PERIODS_FOR_PREDICTION:
        logger.info("Not enough periods for cycle statistics", extra={
            "period_count": len(periods)
        })
        return None

    intervals = calculate_cycle_intervals(periods)
    min_cycle = min(intervals)
    max_cycle = max(intervals)
    variation = max_cycle - min_cycle

    stats = CycleStatistics(
        intervals=intervals,
        average_cycle=round_half_up(sum(intervals), len(intervals)),
        mean_cycle=mean(intervals),
        min_cycle=min_cycle,
        max_cycle=max_cycle,
        variation=variation,
        high_variability=variation > HIGH_VARIABILITY_THRESHOLD_DAYS,
        period_count=len(periods)
    )
    logger.info("Calculated cycle statistics", extra={
        "period_count": stats.period_count,
        "interval_count": stats.interval_count,
        "average_cycle": stats.average_cycle,
        "variation": stats.variation
    })
    return stats
