"""
Cycle statistics and prediction result models.
"""
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class PredictionStatus(str, Enum):
    """
    Terminal states of a single prediction request.
    """
    NO_DATA = "no_data"                      # No entries at all
    NO_PERIOD_DATA = "no_period_data"        # Entries, but none with bleeding
    INSUFFICIENT_DATA = "insufficient_data"  # Fewer than two periods
    UPCOMING = "upcoming"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"


class CycleStatistics(BaseModel):
    """
    Summary of the intervals between consecutive period starts.
    """
    intervals: List[int]
    average_cycle: int
    mean_cycle: float
    min_cycle: int
    max_cycle: int
    variation: int
    high_variability: bool
    period_count: int

    @property
    def interval_count(self) -> int:
        return len(self.intervals)


class PredictionResult(BaseModel):
    """
    Outcome of a prediction request.

    Only the three projection states (upcoming, due today, overdue) carry a
    predicted start and cycle figures. ``days`` is always non-negative: days
    left when upcoming, days late when overdue, 0 when due today.
    """
    status: PredictionStatus
    today: date
    period_count: int = 0
    interval_count: int = 0
    last_period_start: Optional[date] = None
    predicted_start: Optional[date] = None
    days: Optional[int] = None
    average_cycle: Optional[int] = None
    min_cycle: Optional[int] = None
    max_cycle: Optional[int] = None
    high_variability: bool = False

    @property
    def has_projection(self) -> bool:
        return self.status in (
            PredictionStatus.UPCOMING,
            PredictionStatus.DUE_TODAY,
            PredictionStatus.OVERDUE,
        )

    @property
    def days_until(self) -> Optional[int]:
        """Signed day difference between the predicted start and today."""
        if self.predicted_start is None:
            return None
        return (self.predicted_start - self.today).days
