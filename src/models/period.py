"""
Period model definition.
"""
from datetime import date
from typing import List

from pydantic import BaseModel, Field

from src.models.entry import SymptomEntry


class Period(BaseModel):
    """
    A run of bleeding days grouped by the period gap rule.

    Entries are kept in chronological order; the first one is the period start.
    """
    entries: List[SymptomEntry] = Field(..., min_length=1)

    @property
    def start(self) -> date:
        return self.entries[0].date

    @property
    def end(self) -> date:
        return self.entries[-1].date

    @property
    def logged_days(self) -> int:
        """Number of days actually logged within the period."""
        return len(self.entries)

    @property
    def span_days(self) -> int:
        """Calendar days from first to last logged day, inclusive."""
        return (self.end - self.start).days + 1

    @property
    def peak_intensity(self) -> int:
        return max(e.bleeding_intensity for e in self.entries)
