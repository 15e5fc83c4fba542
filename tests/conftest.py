"""
Pytest configuration and shared fixtures.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

import pytest

from src.models.entry import SymptomEntry


def _bleeding_day(day: date, intensity: int = 3) -> SymptomEntry:
    """Create an entry with bleeding on the given day."""
    return SymptomEntry(date=day, bleeding_intensity=intensity)


@pytest.fixture
def bleeding_day():
    """Factory for entries with bleeding on a given day."""
    return _bleeding_day


@dataclass
class FakeLambdaContext:
    """Minimal Lambda context accepted by Logger.inject_lambda_context."""
    function_name: str = "cycle-tracker-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:cycle-tracker-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    return FakeLambdaContext()


@pytest.fixture
def regular_cycle_entries() -> List[SymptomEntry]:
    """Three periods of three logged days each, 28 days apart."""
    entries = []
    for cycle in range(3):
        start = date(2024, 1, 1) + timedelta(days=cycle * 28)
        for offset, intensity in enumerate([4, 3, 1]):
            entries.append(_bleeding_day(start + timedelta(days=offset), intensity))
    # Symptom-only days between periods
    entries.append(SymptomEntry(date=date(2024, 1, 14), mood=2, energy=3))
    entries.append(SymptomEntry(date=date(2024, 2, 20), bloating=1))
    return entries


@pytest.fixture
def irregular_cycle_entries() -> List[SymptomEntry]:
    """Periods starting 2024-01-01, 2024-01-20 and 2024-02-25 (19 and 36 day cycles)."""
    return [
        _bleeding_day(date(2024, 1, 1)),
        _bleeding_day(date(2024, 1, 20)),
        _bleeding_day(date(2024, 2, 25)),
    ]


@pytest.fixture
def sample_rows() -> List[dict]:
    """Raw rows as stored in the table, including key attributes."""
    return [
        {
            "PK": "ENTRIES",
            "SK": "ENTRY#2024-01-01",
            "date": "2024-01-01",
            "bleedingIntensity": 3,
            "mood": 1,
            "abdominalPressure": 2,
            "bloating": 0,
            "energy": 1,
            "notes": "Cramps in the morning"
        },
        {
            "PK": "ENTRIES",
            "SK": "ENTRY#2024-01-29",
            "date": "2024-01-29",
            "bleedingIntensity": 2,
            "mood": 0,
            "abdominalPressure": 0,
            "bloating": 1,
            "energy": 2,
            "notes": ""
        },
    ]
