"""
Segmentation of bleeding days into periods.
"""
from typing import List

from src.models.entry import SymptomEntry
from src.models.period import Period
from src.services.constants import PERIOD_GAP_THRESHOLD_DAYS
from src.services.utils import days_between


def segment_periods(
    bleeding_entries: List[SymptomEntry],
    max_gap: int = PERIOD_GAP_THRESHOLD_DAYS
) -> List[Period]:
    """
    Group bleeding entries into periods.

    Each entry is compared with the entry right before it, not with the start
    of the current period. A difference of at most ``max_gap`` days keeps the
    entry in the current period; anything larger starts a new one. With the
    default threshold, days two apart merge and days three apart split.

    Args:
        bleeding_entries: Entries with bleeding, sorted ascending by date
            (see ``get_bleeding_entries``); unsorted input is not supported
        max_gap: Largest day difference that still counts as the same period

    Returns:
        Periods in chronological order, empty for empty input

    Example:
        >>> periods = segment_periods(get_bleeding_entries(entries))
        >>> [p.start for p in periods]
    """
    if not bleeding_entries:
        return []

    periods = []
    current = [bleeding_entries[0]]
    for previous, entry in zip(bleeding_entries, bleeding_entries[1:]):
        if days_between(previous.date, entry.date) <= max_gap:
            current.append(entry)
        else:
            periods.append(Period(entries=current))
            current = [entry]
    periods.append(Period(entries=current))

    return periods
