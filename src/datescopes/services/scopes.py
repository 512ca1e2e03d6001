"""DateScopes — named time-window filters.

Each scope computes a window with :class:`TimeWindowCalculator` and hands
it to a :class:`RangeFilter`, returning whatever the filter returns
(for :class:`SelectRangeFilter`, the narrowed ``Select``).

Scope names follow one pattern per unit:

============  ===============  ===============  ============  =============
unit          current          previous         one ago       N ago
============  ===============  ===============  ============  =============
second        this_second      last_second      second_ago    seconds_ago
minute        this_minute      last_minute      minute_ago    minutes_ago
hour          this_hour        last_hour        hour_ago      hours_ago
day           today            yesterday        day_ago       days_ago
week          this_week        last_week        week_ago      weeks_ago
month         this_month       last_month       month_ago     months_ago
year          this_year        last_year        year_ago      years_ago
============  ===============  ===============  ============  =============
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from datescopes.domain.errors import InvalidArgumentError
from datescopes.domain.periods import Interval, PeriodMode, PeriodSpec, TimeUnit
from datescopes.infrastructure.filters import RangeFilter
from datescopes.services.calculator import TimeWindowCalculator

if TYPE_CHECKING:
    from datescopes.config.settings import DateScopesSettings
    from datescopes.services.clock import Clock

logger = logging.getLogger(__name__)

DEFAULT_FIELD = "created_at"


@dataclass(frozen=True)
class ScopeDef:
    """Registry entry: which window a scope name stands for."""

    unit: TimeUnit
    mode: PeriodMode
    takes_count: bool = False

    def period(self, count: int | None = None) -> PeriodSpec:
        if self.takes_count:
            if count is None:
                raise InvalidArgumentError(f"{self.unit}s ago scope requires a count")
            return PeriodSpec.ago(self.unit, count)
        if count is not None:
            raise InvalidArgumentError(f"{self.mode} {self.unit} scope does not take a count")
        if self.mode is PeriodMode.N_AGO_TO_NOW:
            return PeriodSpec.ago(self.unit, 1)
        return PeriodSpec(self.unit, self.mode)


def _build_registry() -> dict[str, ScopeDef]:
    current_names = {TimeUnit.DAY: "today"}
    previous_names = {TimeUnit.DAY: "yesterday"}
    registry: dict[str, ScopeDef] = {}
    for unit in TimeUnit:
        registry[current_names.get(unit, f"this_{unit}")] = ScopeDef(unit, PeriodMode.CURRENT)
        registry[previous_names.get(unit, f"last_{unit}")] = ScopeDef(unit, PeriodMode.PREVIOUS)
        registry[f"{unit}_ago"] = ScopeDef(unit, PeriodMode.N_AGO_TO_NOW)
        registry[f"{unit}s_ago"] = ScopeDef(unit, PeriodMode.N_AGO_TO_NOW, takes_count=True)
    return registry


SCOPES: Mapping[str, ScopeDef] = MappingProxyType(_build_registry())


def scope_names() -> list[str]:
    """All registered scope names, grouped by unit from second to year."""
    return list(SCOPES)


class DateScopes:
    """Named scopes over a shared calculator.

    Args:
        calculator: Window arithmetic. Defaults to a calculator on the
            system clock with Monday week starts.
        default_field: Field filtered on when a scope call omits one.
    """

    def __init__(
        self,
        calculator: TimeWindowCalculator | None = None,
        *,
        default_field: str = DEFAULT_FIELD,
    ) -> None:
        if not default_field:
            raise InvalidArgumentError("default_field must be a non-empty string")
        self._calculator = calculator if calculator is not None else TimeWindowCalculator()
        self._default_field = default_field

    @classmethod
    def from_settings(
        cls,
        settings: DateScopesSettings,
        clock: Clock | None = None,
    ) -> DateScopes:
        calculator = TimeWindowCalculator.from_settings(settings, clock)
        return cls(calculator, default_field=settings.window.default_field)

    @property
    def calculator(self) -> TimeWindowCalculator:
        return self._calculator

    @property
    def default_field(self) -> str:
        return self._default_field

    # ── generic entry points ─────────────────────────────────────────

    def window(
        self,
        scope_name: str,
        *,
        count: int | None = None,
        now: datetime | None = None,
    ) -> Interval:
        """Compute the interval a named scope would filter on."""
        return self._calculator.compute(_lookup(scope_name).period(count), now)

    def apply(
        self,
        query: RangeFilter,
        scope_name: str,
        *,
        field: str | None = None,
        count: int | None = None,
        now: datetime | None = None,
    ) -> Any:
        """Apply a scope chosen by name, e.g. ``"last_month"`` or ``"days_ago"``."""
        return self._filter(query, _lookup(scope_name).period(count), field, now)

    def _filter(
        self,
        query: RangeFilter,
        period: PeriodSpec,
        field: str | None,
        now: datetime | None,
    ) -> Any:
        if field is None:
            field = self._default_field
        if not field:
            raise InvalidArgumentError("field name must be a non-empty string")
        interval = self._calculator.compute(period, now)
        logger.debug("Applying %s to field %s", period, field)
        return query.where_between(field, interval.as_tuple())

    # ── second ───────────────────────────────────────────────────────

    def this_second(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the current second."""
        return self._filter(query, PeriodSpec.current(TimeUnit.SECOND), field, now)

    def last_second(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the previous second."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.SECOND), field, now)

    def second_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one second ago until now."""
        return self.seconds_ago(query, 1, field, now=now)

    def seconds_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* seconds ago until now."""
        return self._filter(query, PeriodSpec.ago(TimeUnit.SECOND, count), field, now)

    # ── minute ───────────────────────────────────────────────────────

    def this_minute(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the current minute."""
        return self._filter(query, PeriodSpec.current(TimeUnit.MINUTE), field, now)

    def last_minute(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the previous minute."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.MINUTE), field, now)

    def minute_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one minute ago until now."""
        return self.minutes_ago(query, 1, field, now=now)

    def minutes_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* minutes ago until now."""
        return self._filter(query, PeriodSpec.ago(TimeUnit.MINUTE, count), field, now)

    # ── hour ─────────────────────────────────────────────────────────

    def this_hour(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the current hour."""
        return self._filter(query, PeriodSpec.current(TimeUnit.HOUR), field, now)

    def last_hour(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the previous hour."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.HOUR), field, now)

    def hour_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one hour ago until now."""
        return self.hours_ago(query, 1, field, now=now)

    def hours_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* hours ago until now."""
        return self._filter(query, PeriodSpec.ago(TimeUnit.HOUR, count), field, now)

    # ── day ──────────────────────────────────────────────────────────

    def today(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from today."""
        return self._filter(query, PeriodSpec.current(TimeUnit.DAY), field, now)

    def yesterday(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from yesterday."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.DAY), field, now)

    def day_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one day ago until now."""
        return self.days_ago(query, 1, field, now=now)

    def days_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* days ago until now."""
        return self._filter(query, PeriodSpec.ago(TimeUnit.DAY, count), field, now)

    # ── week ─────────────────────────────────────────────────────────

    def this_week(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the current week."""
        return self._filter(query, PeriodSpec.current(TimeUnit.WEEK), field, now)

    def last_week(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the previous week."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.WEEK), field, now)

    def week_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one week ago until now."""
        return self.weeks_ago(query, 1, field, now=now)

    def weeks_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* weeks ago until now."""
        return self._filter(query, PeriodSpec.ago(TimeUnit.WEEK, count), field, now)

    # ── month ────────────────────────────────────────────────────────

    def this_month(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the current month."""
        return self._filter(query, PeriodSpec.current(TimeUnit.MONTH), field, now)

    def last_month(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the previous calendar month."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.MONTH), field, now)

    def month_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one month ago until now."""
        return self.months_ago(query, 1, field, now=now)

    def months_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* months ago until now.

        The start clamps to the last day of a shorter month: from
        2024-03-31 one month back is 2024-02-29, not 2024-03-02.
        """
        return self._filter(query, PeriodSpec.ago(TimeUnit.MONTH, count), field, now)

    # ── year ─────────────────────────────────────────────────────────

    def this_year(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the current year."""
        return self._filter(query, PeriodSpec.current(TimeUnit.YEAR), field, now)

    def last_year(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records in the previous year."""
        return self._filter(query, PeriodSpec.previous(TimeUnit.YEAR), field, now)

    def year_ago(
        self, query: RangeFilter, field: str | None = None, *, now: datetime | None = None
    ) -> Any:
        """Records from one year ago until now."""
        return self.years_ago(query, 1, field, now=now)

    def years_ago(
        self,
        query: RangeFilter,
        count: int,
        field: str | None = None,
        *,
        now: datetime | None = None,
    ) -> Any:
        """Records from *count* years ago until now.

        A leap day clamps to February 28 in a common year: from
        2024-02-29 one year back is 2023-02-28.
        """
        return self._filter(query, PeriodSpec.ago(TimeUnit.YEAR, count), field, now)


def _lookup(scope_name: str) -> ScopeDef:
    try:
        return SCOPES[scope_name]
    except KeyError:
        raise InvalidArgumentError(f"Unknown scope {scope_name!r}") from None
