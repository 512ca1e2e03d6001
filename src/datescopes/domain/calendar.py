"""Calendar arithmetic for time units.

``floor`` and ``ceil`` give the first and last tick of the unit that
contains an instant; ``shift`` moves an instant by whole units.
Month and year shifts go through ``dateutil.relativedelta`` and clamp
to the last valid day (2024-03-31 minus one month is 2024-02-29).

The tick is one microsecond, the resolution of :class:`datetime.datetime`.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from dateutil.relativedelta import relativedelta

from datescopes.domain.errors import InvalidArgumentError
from datescopes.domain.periods import TimeUnit

TICK = timedelta(microseconds=1)


class Weekday(StrEnum):
    """Day a calendar week starts on."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def index(self) -> int:
        """ISO-style index with Monday as 0, matching ``datetime.weekday()``."""
        return list(Weekday).index(self)


DEFAULT_WEEK_START = Weekday.MONDAY


def unit_delta(unit: TimeUnit, count: int = 1) -> relativedelta:
    """Return a relativedelta spanning *count* units."""
    match unit:
        case TimeUnit.SECOND:
            return relativedelta(seconds=count)
        case TimeUnit.MINUTE:
            return relativedelta(minutes=count)
        case TimeUnit.HOUR:
            return relativedelta(hours=count)
        case TimeUnit.DAY:
            return relativedelta(days=count)
        case TimeUnit.WEEK:
            return relativedelta(weeks=count)
        case TimeUnit.MONTH:
            return relativedelta(months=count)
        case TimeUnit.YEAR:
            return relativedelta(years=count)
    raise InvalidArgumentError(f"Unknown time unit: {unit!r}")


def shift(instant: datetime, unit: TimeUnit, count: int) -> datetime:
    """Move *instant* by *count* units (negative moves backwards)."""
    return instant + unit_delta(unit, count)


def floor(
    instant: datetime,
    unit: TimeUnit,
    week_start: Weekday = DEFAULT_WEEK_START,
) -> datetime:
    """First tick of the *unit* containing *instant*."""
    match unit:
        case TimeUnit.SECOND:
            return instant.replace(microsecond=0)
        case TimeUnit.MINUTE:
            return instant.replace(second=0, microsecond=0)
        case TimeUnit.HOUR:
            return instant.replace(minute=0, second=0, microsecond=0)
        case TimeUnit.DAY:
            return _start_of_day(instant)
        case TimeUnit.WEEK:
            days_back = (instant.weekday() - week_start.index) % 7
            return _start_of_day(instant) - timedelta(days=days_back)
        case TimeUnit.MONTH:
            return _start_of_day(instant).replace(day=1)
        case TimeUnit.YEAR:
            return _start_of_day(instant).replace(month=1, day=1)
    raise InvalidArgumentError(f"Unknown time unit: {unit!r}")


def ceil(
    instant: datetime,
    unit: TimeUnit,
    week_start: Weekday = DEFAULT_WEEK_START,
) -> datetime:
    """Last tick of the *unit* containing *instant*."""
    return shift(floor(instant, unit, week_start), unit, 1) - TICK


def _start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)
