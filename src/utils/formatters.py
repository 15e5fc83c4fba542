"""
Plain-text formatting of prediction results.
"""
from typing import List

from src.models.prediction import PredictionResult, PredictionStatus
from src.services.constants import MIN_PERIODS_FOR_PREDICTION
from src.utils.validators import format_calendar_date


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_prediction_headline(result: PredictionResult) -> str:
    """
    Format the one-line status of a prediction.

    Example:
        >>> format_prediction_headline(result)
        '12 days (2024-02-26)'
    """
    if result.status == PredictionStatus.NO_DATA:
        return "No data available"
    if result.status == PredictionStatus.NO_PERIOD_DATA:
        return "No period data found"
    if result.status == PredictionStatus.INSUFFICIENT_DATA:
        return "Need more cycle data"

    predicted = format_calendar_date(result.predicted_start)
    if result.status == PredictionStatus.DUE_TODAY:
        return f"Today! ({predicted})"
    if result.status == PredictionStatus.OVERDUE:
        return f"{_plural(result.days, 'day')} overdue (expected: {predicted})"
    return f"{_plural(result.days, 'day')} ({predicted})"


def format_prediction_details(result: PredictionResult) -> List[str]:
    """Format the explanatory lines shown under the headline."""
    if result.status == PredictionStatus.NO_DATA:
        return ["Add some entries to get cycle predictions"]
    if result.status == PredictionStatus.NO_PERIOD_DATA:
        return ["Track bleeding to get cycle predictions"]
    if result.status == PredictionStatus.INSUFFICIENT_DATA:
        return [
            f"Found {_plural(result.period_count, 'period')}. "
            f"Need at least {MIN_PERIODS_FOR_PREDICTION} cycles for prediction.",
            f"Last period: {format_calendar_date(result.last_period_start)}",
        ]

    lines = [
        "📊 Cycle Analysis:",
        f"• Average cycle: {result.average_cycle} days "
        f"({result.min_cycle}-{result.max_cycle} days range)",
        f"• Based on {_plural(result.period_count, 'period')}, "
        f"{_plural(result.interval_count, 'cycle')} analyzed",
        f"• Last period: {format_calendar_date(result.last_period_start)}",
    ]
    if result.high_variability:
        lines.append("⚠️ High cycle variation - prediction less reliable")
    return lines


def format_prediction_message(result: PredictionResult) -> str:
    """Format the full status message: headline followed by details."""
    return "\n".join([format_prediction_headline(result), *format_prediction_details(result)])
