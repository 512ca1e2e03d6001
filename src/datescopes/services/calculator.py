"""TimeWindowCalculator — resolve a PeriodSpec to an Interval.

Rules, all relative to ``now``:

- ``current``: first through last tick of the unit containing now.
- ``previous``: the current window moved back one unit on both ends.
  Month is the exception: it spans the first through the last calendar
  day of the month before now's month, so the end lands on the real
  month end rather than on "this month's end minus a month".
- ``n_ago_to_now``: ``[now - count * unit, now]``.

Both endpoints are inclusive in every mode.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from datescopes.domain import calendar
from datescopes.domain.calendar import DEFAULT_WEEK_START, Weekday
from datescopes.domain.periods import Interval, PeriodMode, PeriodSpec, TimeUnit
from datescopes.services.clock import Clock, SystemClock

if TYPE_CHECKING:
    from datescopes.config.settings import DateScopesSettings

logger = logging.getLogger(__name__)


class TimeWindowCalculator:
    """Stateless window arithmetic over an injected clock.

    Args:
        clock: Source of "now" when a call does not pass one. Defaults
            to the system clock in the local timezone.
        week_start: Day weeks begin on. Defaults to Monday.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        week_start: Weekday | str = DEFAULT_WEEK_START,
    ) -> None:
        self._clock = clock if clock is not None else SystemClock()
        self._week_start = Weekday(week_start)

    @classmethod
    def from_settings(
        cls,
        settings: DateScopesSettings,
        clock: Clock | None = None,
    ) -> TimeWindowCalculator:
        """Build a calculator from the ``[window]`` settings section."""
        if clock is None:
            clock = SystemClock(settings.window.timezone)
        return cls(clock, week_start=settings.window.week_start)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def week_start(self) -> Weekday:
        return self._week_start

    def now(self) -> datetime:
        return self._clock.now()

    def compute(self, period: PeriodSpec, now: datetime | None = None) -> Interval:
        """Resolve *period* against *now* (read from the clock if omitted)."""
        if now is None:
            now = self._clock.now()

        match period.mode:
            case PeriodMode.CURRENT:
                interval = self._current(period.unit, now)
            case PeriodMode.PREVIOUS:
                interval = self._previous(period.unit, now)
            case PeriodMode.N_AGO_TO_NOW:
                interval = Interval(calendar.shift(now, period.unit, -period.count), now)

        logger.debug(
            "Computed window %s: %s .. %s",
            period,
            interval.start.isoformat(),
            interval.end.isoformat(),
        )
        return interval

    def current(self, unit: TimeUnit | str, now: datetime | None = None) -> Interval:
        return self.compute(PeriodSpec.current(unit), now)

    def previous(self, unit: TimeUnit | str, now: datetime | None = None) -> Interval:
        return self.compute(PeriodSpec.previous(unit), now)

    def n_ago_to_now(
        self,
        unit: TimeUnit | str,
        count: int,
        now: datetime | None = None,
    ) -> Interval:
        return self.compute(PeriodSpec.ago(unit, count), now)

    # ── internals ────────────────────────────────────────────────────

    def _current(self, unit: TimeUnit, now: datetime) -> Interval:
        return Interval(
            calendar.floor(now, unit, self._week_start),
            calendar.ceil(now, unit, self._week_start),
        )

    def _previous(self, unit: TimeUnit, now: datetime) -> Interval:
        if unit is TimeUnit.MONTH:
            month_start = calendar.floor(now, TimeUnit.MONTH)
            return Interval(
                calendar.shift(month_start, TimeUnit.MONTH, -1),
                month_start - calendar.TICK,
            )
        current = self._current(unit, now)
        return Interval(
            calendar.shift(current.start, unit, -1),
            calendar.shift(current.end, unit, -1),
        )
