"""Clock capability — the single source of "now".

Calculators read the clock once per computation. Callers that need
several windows anchored to the same instant pass ``now=`` explicitly
or inject a :class:`FixedClock`.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo

from dateutil import tz as dateutil_tz


@runtime_checkable
class Clock(Protocol):
    """Anything that can report the current instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in a fixed timezone.

    With ``tz=None`` the instant is expressed in the system local zone,
    as a DST-aware ``tzlocal`` so windows reaching across a DST change
    keep the offset of the date they land on.
    """

    def __init__(self, tz: tzinfo | str | None = None) -> None:
        if tz is None:
            tz = dateutil_tz.tzlocal()
        self._tz: tzinfo = ZoneInfo(tz) if isinstance(tz, str) else tz

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def __repr__(self) -> str:
        return f"SystemClock(tz={self._tz!r})"


class FixedClock:
    """Clock frozen at one instant."""

    def __init__(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"
