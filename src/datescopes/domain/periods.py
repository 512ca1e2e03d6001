"""Period specifications and the intervals they resolve to.

A :class:`PeriodSpec` names a window relative to "now" (this week, the
previous month, the last three days). The calculator resolves it to an
:class:`Interval`, an inclusive ``[start, end]`` pair of instants.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from datescopes.domain.errors import InvalidArgumentError


class TimeUnit(StrEnum):
    """Calendar units a window can be measured in."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class PeriodMode(StrEnum):
    """How a window is positioned relative to now."""

    CURRENT = "current"
    PREVIOUS = "previous"
    N_AGO_TO_NOW = "n_ago_to_now"


def validate_count(count: object) -> int:
    """Return *count* if it is a positive integer, else raise."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError(f"count must be a positive integer, got {count!r}")
    if count <= 0:
        raise InvalidArgumentError(f"count must be a positive integer, got {count}")
    return count


@dataclass(frozen=True)
class PeriodSpec:
    """A window identified by unit, mode, and count.

    ``count`` only matters for :attr:`PeriodMode.N_AGO_TO_NOW`; it is
    validated for every mode so a spec can never hold a non-positive
    count.
    """

    unit: TimeUnit
    mode: PeriodMode
    count: int = 1

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "unit", TimeUnit(self.unit))
            object.__setattr__(self, "mode", PeriodMode(self.mode))
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from exc
        validate_count(self.count)

    @classmethod
    def current(cls, unit: TimeUnit | str) -> PeriodSpec:
        return cls(unit, PeriodMode.CURRENT)  # type: ignore[arg-type]

    @classmethod
    def previous(cls, unit: TimeUnit | str) -> PeriodSpec:
        return cls(unit, PeriodMode.PREVIOUS)  # type: ignore[arg-type]

    @classmethod
    def ago(cls, unit: TimeUnit | str, count: int = 1) -> PeriodSpec:
        return cls(unit, PeriodMode.N_AGO_TO_NOW, count)  # type: ignore[arg-type]

    def __str__(self) -> str:
        if self.mode is PeriodMode.N_AGO_TO_NOW:
            return f"{self.count} {self.unit} ago to now"
        return f"{self.mode} {self.unit}"


@dataclass(frozen=True)
class Interval:
    """Inclusive ``[start, end]`` range of instants."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"Interval start {self.start.isoformat()} is after end {self.end.isoformat()}"
            raise InvalidArgumentError(msg)

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def as_tuple(self) -> tuple[datetime, datetime]:
        return (self.start, self.end)

    def __iter__(self) -> Iterator[datetime]:
        return iter(self.as_tuple())
