"""
Pytest configuration and shared fixtures.

This file adds the project root to the Python path so that tests can import
from the domain, repositories, services and api packages.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from repositories.kv_store import InMemoryKeyValueStore  # noqa: E402


MAX_SCORE_ANSWERS = {
    "L1-A": "L1-A-1",
    "L1-B": "L1-B-1",
    "L1-C": "L1-C-1",
    "L2-A1": "L2-A1-2",
    "L2-A2": "L2-A2-3",
    "L2-B1": "L2-B1-2",
    "L2-B2": "L2-B2-1",
    "L2-C1": "L2-C1-3",
    "L3-A1": "L3-A1-1",
    "L3-B1": "L3-B1-1",
    "L3-C1": "L3-C1-3",
}

ZERO_SCORE_ANSWERS = {
    "L1-A": "L1-A-3",
    "L1-B": "L1-B-3",
    "L1-C": "L1-C-3",
    "L2-C1": "L2-C1-1",
    "L3-A1-ALT": "L3-A1-ALT-1",
    "L3-B1": "L3-B1-3",
    "L3-C1": "L3-C1-1",
}


def valid_payload(**overrides):
    payload = {
        "company": "  Muster GmbH ",
        "contact": " Max Mustermann",
        "employeesRange": "21-50",
        "email": "  Max.Mustermann@Muster.DE ",
        "phone": " +49 123 456789 ",
        "role": "IT-Leitung",
        "notes": "",
        "consent": True,
        "scoreSummary": {"areaA": 4, "areaB": 3, "areaC": 2, "average": 3.0},
    }
    payload.update(overrides)
    return payload


class StepClock:
    """Returns a UTC time that moves forward one second per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def clock() -> StepClock:
    return StepClock(datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc))
