"""
Symptom entry model definition.
"""
from datetime import date
from typing import Any, Dict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.services.constants import (
    BLEEDING_INTENSITY_MAX,
    NOTES_MAX_LENGTH,
    SYMPTOM_FIELD_LIMITS,
    SYMPTOM_SCALE_MAX,
)
from src.utils.validators import normalize_notes, parse_calendar_date, parse_symptom_value


def _is_strict(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("strict"))


class SymptomEntry(BaseModel):
    """
    A single day of symptom observations, keyed by its calendar date.

    Field values are clamped into their domains on construction. Passing
    ``context={"strict": True}`` to ``model_validate`` rejects out-of-range
    values instead. Legacy spreadsheet column names are accepted as aliases.
    """
    model_config = ConfigDict(frozen=True)

    date: date
    bleeding_intensity: int = Field(
        0, ge=0, le=BLEEDING_INTENSITY_MAX,
        validation_alias=AliasChoices("bleeding_intensity", "bleedingIntensity", "krvaceni"),
        serialization_alias="bleedingIntensity",
    )
    mood: int = Field(
        0, ge=0, le=SYMPTOM_SCALE_MAX,
        validation_alias=AliasChoices("mood", "nalady"),
    )
    abdominal_pressure: int = Field(
        0, ge=0, le=SYMPTOM_SCALE_MAX,
        validation_alias=AliasChoices("abdominal_pressure", "abdominalPressure", "tlak"),
        serialization_alias="abdominalPressure",
    )
    bloating: int = Field(
        0, ge=0, le=SYMPTOM_SCALE_MAX,
        validation_alias=AliasChoices("bloating", "nadymani"),
    )
    energy: int = Field(
        0, ge=0, le=SYMPTOM_SCALE_MAX,
        validation_alias=AliasChoices("energy", "energie"),
    )
    notes: str = Field("", max_length=NOTES_MAX_LENGTH)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date:
        return parse_calendar_date(value)

    @field_validator(*SYMPTOM_FIELD_LIMITS, mode="before")
    @classmethod
    def _parse_symptom(cls, value: Any, info: ValidationInfo) -> int:
        return parse_symptom_value(value, SYMPTOM_FIELD_LIMITS[info.field_name], strict=_is_strict(info))

    @field_validator("notes", mode="before")
    @classmethod
    def _parse_notes(cls, value: Any, info: ValidationInfo) -> str:
        return normalize_notes(value, strict=_is_strict(info))

    @classmethod
    def from_raw(cls, data: Dict[str, Any], strict: bool = False) -> "SymptomEntry":
        """Build an entry from a raw mapping (persistence row, request body or feed item)."""
        return cls.model_validate(data, context={"strict": strict})

    @property
    def has_bleeding(self) -> bool:
        """Check if this day counts towards a period."""
        return self.bleeding_intensity > 0

    def to_item(self) -> Dict[str, Any]:
        """Serialize with the canonical YYYY-MM-DD date and camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
