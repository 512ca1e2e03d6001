"""Range-filter collaborators.

The window core only ever calls ``where_between(field, (start, end))``.
:class:`RangeFilter` names that capability; :class:`SelectRangeFilter`
implements it for SQLAlchemy ``Select`` statements built from either a
Core ``Table`` or an ORM mapped class.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Select
from sqlalchemy.sql.elements import ColumnElement

from datescopes.domain.errors import InvalidArgumentError

Encoder = Callable[[datetime], Any]


@runtime_checkable
class RangeFilter(Protocol):
    """Anything that can narrow a query to an inclusive range on a field."""

    def where_between(self, field: str, bounds: tuple[datetime, datetime]) -> Any: ...


def iso_text(instant: datetime) -> str:
    """Encode an instant as ISO 8601 text, for timestamp columns stored as TEXT.

    Lexicographic order of these strings matches chronological order as
    long as every stored value shares the same offset and precision.
    """
    return instant.isoformat(timespec="microseconds")


class SelectRangeFilter:
    """Append ``column BETWEEN :start AND :end`` to a SQLAlchemy select.

    Args:
        stmt: The statement to narrow. Never executed here.
        source: Core ``Table``/``FromClause`` (columns looked up through
            ``.c``) or an ORM mapped class (columns looked up as
            attributes).
        encode: Optional conversion applied to both bounds before they
            are bound, e.g. :func:`iso_text`.
    """

    def __init__(
        self,
        stmt: Select[Any],
        source: Any,
        *,
        encode: Encoder | None = None,
    ) -> None:
        self._stmt = stmt
        self._source = source
        self._encode = encode

    @property
    def statement(self) -> Select[Any]:
        return self._stmt

    def column(self, field: str) -> ColumnElement[Any]:
        """Resolve *field* against the source."""
        if not field:
            raise InvalidArgumentError("field name must be a non-empty string")
        columns = getattr(self._source, "c", None)
        if columns is not None:
            if field not in columns:
                raise InvalidArgumentError(f"Unknown field {field!r} on {self._source}")
            return columns[field]
        attr = getattr(self._source, field, None)
        if attr is None or not hasattr(attr, "between"):
            raise InvalidArgumentError(f"Unknown field {field!r} on {self._source!r}")
        return attr

    def where_between(self, field: str, bounds: tuple[datetime, datetime]) -> Select[Any]:
        start, end = bounds
        if self._encode is not None:
            start, end = self._encode(start), self._encode(end)
        return self._stmt.where(self.column(field).between(start, end))
