"""
In-memory keyed store of symptom entries.

The store owns the materialized snapshot the engine works on. It keeps at
most one entry per calendar date; writing a date that already exists
replaces the whole entry. There is no conflict detection: when several
writers update the same backing data, the last write wins.

Typical usage:
    store = EntryStore.from_items(rows)
    result = store.upsert({"date": "2024-01-01", "bleeding_intensity": 3})
    if not result.ok:
        print(result.error, result.message)
"""
import hashlib
import json
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from src.models.entry import SymptomEntry
from src.models.result import ErrorKind, OperationResult
from src.services.exceptions import InvalidDateError
from src.utils.validators import format_calendar_date, parse_calendar_date

logger = Logger()

EntryInput = Union[SymptomEntry, Mapping[str, Any]]


def _error_kind(error: ValidationError) -> ErrorKind:
    """Map a pydantic validation failure onto the engine's error kinds."""
    locations = [e["loc"][0] if e["loc"] else None for e in error.errors()]
    if "date" in locations or None in locations:
        return ErrorKind.INVALID_DATE
    return ErrorKind.OUT_OF_RANGE_VALUE


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or 'entry'}: {e['msg']}"
        for e in error.errors()
    )


class EntryStore:
    """
    Keyed collection of symptom entries, one per calendar date.

    Args:
        strict: Reject out-of-range symptom values instead of clamping them
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._entries: Dict[date, SymptomEntry] = {}

    @classmethod
    def from_items(cls, items: Iterable[Any], strict: bool = False) -> "EntryStore":
        """
        Materialize a store from a raw snapshot.

        Rows that are empty, have no date or fail validation are skipped with
        a warning. A later row for an already seen date replaces the earlier one.

        Args:
            items: Raw rows from persistence or the entry feed
            strict: Strict mode for the resulting store
        """
        store = cls(strict=strict)
        skipped = 0
        for item in items:
            if not isinstance(item, (Mapping, SymptomEntry)):
                skipped += 1
                continue
            if isinstance(item, Mapping) and not item.get("date"):
                skipped += 1
                continue
            result = store.upsert(item)
            if not result.ok:
                skipped += 1
        if skipped:
            logger.warning("Skipped invalid rows while loading entries", extra={
                "skipped": skipped,
                "loaded": len(store)
            })
        return store

    def upsert(self, entry: EntryInput, today: Optional[date] = None) -> OperationResult:
        """
        Insert an entry, or fully replace the entry stored for its date.

        The entry is validated again even when it already is a
        ``SymptomEntry``: values are clamped into range, or rejected in strict
        mode.

        Args:
            entry: Entry model or raw mapping
            today: If given, dates after this day are rejected

        Returns:
            OperationResult, failing with INVALID_DATE, OUT_OF_RANGE_VALUE
            or FUTURE_DATE
        """
        data = entry.model_dump() if isinstance(entry, SymptomEntry) else entry
        try:
            validated = SymptomEntry.from_raw(data, strict=self.strict)
        except ValidationError as e:
            kind = _error_kind(e)
            logger.warning("Rejected symptom entry", extra={
                "error": kind.value,
                "details": _describe(e)
            })
            return OperationResult.failure(kind, _describe(e))

        if today is not None and validated.date > today:
            return OperationResult.failure(
                ErrorKind.FUTURE_DATE,
                f"Cannot add entries for future dates ({format_calendar_date(validated.date)})"
            )

        replaced = validated.date in self._entries
        self._entries[validated.date] = validated
        logger.debug("Stored symptom entry", extra={
            "date": format_calendar_date(validated.date),
            "replaced": replaced
        })
        return OperationResult.success(replaced=replaced)

    def delete(self, entry_date: Union[date, str]) -> OperationResult:
        """
        Remove the entry for a date.

        Returns:
            OperationResult, failing with NOT_FOUND when no entry exists or
            INVALID_DATE when the date cannot be parsed
        """
        try:
            key = parse_calendar_date(entry_date)
        except InvalidDateError as e:
            return OperationResult.failure(ErrorKind.INVALID_DATE, str(e))

        if self._entries.pop(key, None) is None:
            return OperationResult.failure(
                ErrorKind.NOT_FOUND,
                f"No entry for {format_calendar_date(key)}"
            )
        return OperationResult.success()

    def get(self, entry_date: Union[date, str]) -> Optional[SymptomEntry]:
        """Return the entry for a date, or None."""
        try:
            return self._entries.get(parse_calendar_date(entry_date))
        except InvalidDateError:
            return None

    def list(self) -> List[SymptomEntry]:
        """Return all entries. Order is not guaranteed; sort before relying on it."""
        return list(self._entries.values())

    def fingerprint(self) -> str:
        return snapshot_fingerprint(self.list())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_date: object) -> bool:
        return self.get(entry_date) is not None


def snapshot_fingerprint(entries: Iterable[SymptomEntry]) -> str:
    """
    Compute an order-independent digest of a snapshot of entries.

    Example:
        >>> snapshot_fingerprint([]) == snapshot_fingerprint(())
        True
    """
    items = sorted((e.to_item() for e in entries), key=lambda item: item["date"])
    payload = json.dumps(items, sort_keys=True, ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def snapshot_changed(previous: Optional[str], entries: Iterable[SymptomEntry]) -> bool:
    """
    Check whether a snapshot differs from a previously seen fingerprint.

    A missing previous fingerprint (first load) never counts as a change.
    """
    if previous is None:
        return False
    return snapshot_fingerprint(entries) != previous
