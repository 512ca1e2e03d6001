"""Shared pytest fixtures and test helpers for datescopes tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime
from typing import Any

import pytest
from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text, create_engine, insert
from sqlalchemy.engine import Engine

from datescopes.services.calculator import TimeWindowCalculator
from datescopes.services.clock import FixedClock
from datescopes.services.scopes import DateScopes

# Friday, mid-morning, in a leap year.
NOW = datetime(2024, 3, 15, 10, 30, 0)

metadata = MetaData()

events = Table(
    "events",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", Text, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("published_at", DateTime),
)

EVENT_ROWS: list[dict[str, Any]] = [
    {"id": 1, "name": "now", "created_at": NOW, "published_at": None},
    {"id": 2, "name": "monday-midnight", "created_at": datetime(2024, 3, 11, 0, 0, 0)},
    {"id": 3, "name": "sunday-before", "created_at": datetime(2024, 3, 10, 23, 59, 59)},
    {"id": 4, "name": "leap-day", "created_at": datetime(2024, 2, 29, 12, 0, 0)},
    {"id": 5, "name": "feb-first", "created_at": datetime(2024, 2, 1, 0, 0, 0)},
    {"id": 6, "name": "last-year", "created_at": datetime(2023, 7, 4, 9, 0, 0)},
    {"id": 7, "name": "three-days", "created_at": datetime(2024, 3, 12, 10, 30, 0)},
    {"id": 8, "name": "just-over-three-days", "created_at": datetime(2024, 3, 12, 10, 29, 59)},
]


class RecordingFilter:
    """RangeFilter double that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[datetime, datetime]]] = []

    def where_between(self, field: str, bounds: tuple[datetime, datetime]) -> RecordingFilter:
        self.calls.append((field, bounds))
        return self

    @property
    def last(self) -> tuple[str, tuple[datetime, datetime]]:
        return self.calls[-1]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def calculator(clock: FixedClock) -> TimeWindowCalculator:
    return TimeWindowCalculator(clock)


@pytest.fixture
def scopes(calculator: TimeWindowCalculator) -> DateScopes:
    return DateScopes(calculator)


@pytest.fixture
def recorder() -> RecordingFilter:
    return RecordingFilter()


@pytest.fixture
def db_engine() -> Generator[Engine]:
    """In-memory SQLite engine with a seeded ``events`` table."""
    engine = create_engine("sqlite://", echo=False)
    metadata.create_all(engine)
    rows = [{"published_at": None, **row} for row in EVENT_ROWS]
    with engine.begin() as conn:
        conn.execute(insert(events), rows)
    try:
        yield engine
    finally:
        engine.dispose()
