"""datescopes: named time-window filters for SQL queries.

Typical use::

    from datescopes import DateScopes, SelectRangeFilter

    scopes = DateScopes()
    stmt = scopes.this_week(SelectRangeFilter(select(events), events))
"""

from __future__ import annotations

from datescopes.domain.calendar import Weekday
from datescopes.domain.errors import ConfigError, DateScopesError, InvalidArgumentError
from datescopes.domain.periods import Interval, PeriodMode, PeriodSpec, TimeUnit
from datescopes.infrastructure.filters import RangeFilter, SelectRangeFilter, iso_text
from datescopes.services.calculator import TimeWindowCalculator
from datescopes.services.clock import Clock, FixedClock, SystemClock
from datescopes.services.scopes import SCOPES, DateScopes, scope_names

__all__ = [
    "SCOPES",
    "Clock",
    "ConfigError",
    "DateScopes",
    "DateScopesError",
    "FixedClock",
    "Interval",
    "InvalidArgumentError",
    "PeriodMode",
    "PeriodSpec",
    "RangeFilter",
    "SelectRangeFilter",
    "SystemClock",
    "TimeUnit",
    "TimeWindowCalculator",
    "Weekday",
    "iso_text",
    "scope_names",
]
