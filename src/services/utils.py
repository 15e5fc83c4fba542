"""
Shared utility functions for cycle-related services.
"""
from datetime import date
from typing import Iterable, List

from src.models.entry import SymptomEntry


def get_bleeding_entries(entries: Iterable[SymptomEntry], reverse: bool = False) -> List[SymptomEntry]:
    """
    Filter entries with bleeding and sort them by date.

    Args:
        entries: Entries in any order
        reverse: Whether to sort newest first

    Returns:
        Entries with ``bleeding_intensity > 0`` sorted by date

    Example:
        >>> bleeding = get_bleeding_entries(store.list())
        >>> periods = segment_periods(bleeding)
    """
    return sorted(
        (e for e in entries if e.has_bleeding),
        key=lambda e: e.date,
        reverse=reverse
    )


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return later.toordinal() - earlier.toordinal()
