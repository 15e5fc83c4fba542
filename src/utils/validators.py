"""
Validation and normalization helpers for symptom entries.

Values reaching the engine may come from a hand-edited spreadsheet, an old
client or a corrupted export, so every helper here re-checks its input
instead of trusting upstream clamping.
"""
import math
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from src.services.constants import DATE_FORMAT, NOTES_MAX_LENGTH
from src.services.exceptions import InvalidDateError, OutOfRangeValueError

_CANONICAL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_date(value: Any) -> date:
    """
    Parse a calendar date from its canonical YYYY-MM-DD form.

    Args:
        value: A ``date``, a ``datetime`` (time part is dropped) or a
            zero-padded ``YYYY-MM-DD`` string

    Returns:
        The parsed date

    Raises:
        InvalidDateError: If the value is empty, malformed or names a day
            that does not exist (e.g. 2023-02-29)

    Example:
        >>> parse_calendar_date("2024-02-29")
        datetime.date(2024, 2, 29)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not _CANONICAL_DATE.match(text):
        raise InvalidDateError(f"Date must use the YYYY-MM-DD format, got {value!r}")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidDateError(f"Not a valid calendar date: {value!r}") from e


def validate_date(date_str: str) -> Optional[date]:
    """Return the parsed date, or None if the string is not a valid date."""
    try:
        return parse_calendar_date(date_str)
    except InvalidDateError:
        return None


def format_calendar_date(value: date) -> str:
    """Format a date in the canonical zero-padded YYYY-MM-DD form."""
    return value.isoformat()


def _to_int(value: Any) -> Optional[int]:
    """Leading-integer parse, None when nothing numeric can be read."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return int(value) if value.is_finite() else None
    if isinstance(value, str):
        match = re.match(r"^\s*([+-]?\d+)", value)
        return int(match.group(1)) if match else None
    return None


def clamp_symptom_value(value: Any, max_value: int) -> int:
    """
    Coerce a raw symptom value into ``[0, max_value]``.

    Unparsable or missing values count as 0.

    Example:
        >>> clamp_symptom_value("7", 5)
        5
        >>> clamp_symptom_value("abc", 3)
        0
    """
    number = _to_int(value)
    if number is None:
        return 0
    return max(0, min(max_value, number))


def parse_symptom_value(value: Any, max_value: int, strict: bool = False) -> int:
    """
    Parse a symptom value, clamping it or, in strict mode, rejecting it.

    Args:
        value: Raw value (int, numeric string or None)
        max_value: Inclusive upper bound of the field's domain
        strict: Reject instead of clamp

    Raises:
        OutOfRangeValueError: In strict mode, when the value is not an
            integer inside ``[0, max_value]``
    """
    if value is None or value == "":
        return 0
    if not strict:
        return clamp_symptom_value(value, max_value)

    if isinstance(value, bool):
        raise OutOfRangeValueError(f"Expected an integer, got {value!r}")
    if isinstance(value, str) and not re.fullmatch(r"\s*[+-]?\d+\s*", value):
        raise OutOfRangeValueError(f"Expected an integer, got {value!r}")
    number = _to_int(value)
    if number is None or isinstance(value, (float, Decimal)) and value != number:
        raise OutOfRangeValueError(f"Expected an integer, got {value!r}")
    if not 0 <= number <= max_value:
        raise OutOfRangeValueError(f"Value {number} outside range 0-{max_value}")
    return number


def normalize_notes(notes: Any, strict: bool = False) -> str:
    """Coerce notes to text, truncating (or in strict mode rejecting) long input."""
    if notes is None:
        return ""
    text = str(notes)
    if len(text) > NOTES_MAX_LENGTH:
        if strict:
            raise OutOfRangeValueError(
                f"Notes exceed {NOTES_MAX_LENGTH} characters ({len(text)})"
            )
        return text[:NOTES_MAX_LENGTH]
    return text
