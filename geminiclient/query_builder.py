"""Fluent builder for SELECT queries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Any

from .condition import Condition
from .expression import Expression
from .operators import SortOrder


@dataclass
class Query:
    """A command to send to the server together with its target."""

    command: str = ""
    database: str = ""
    retention_policy: str = ""
    precision: Any = None


def _zone_name(zone: tzinfo | str) -> str:
    if isinstance(zone, str):
        return zone
    key = getattr(zone, "key", None)
    if key:
        return key
    return str(zone)


class QueryBuilder:
    """Collects the parts of a SELECT statement and renders them into a Query."""

    def __init__(self) -> None:
        self._select: tuple[Expression, ...] = ()
        self._from: tuple[str, ...] = ()
        self._where: Condition | None = None
        self._group_by: tuple[Expression, ...] = ()
        self._order: SortOrder | str | None = None
        self._limit = 0
        self._offset = 0
        self._timezone: tzinfo | str | None = None

    def select(self, *expressions: Expression) -> QueryBuilder:
        self._select = expressions
        return self

    def from_(self, *tables: str) -> QueryBuilder:
        self._from = tables
        return self

    def where(self, condition: Condition) -> QueryBuilder:
        self._where = condition
        return self

    def group_by(self, *expressions: Expression) -> QueryBuilder:
        self._group_by = expressions
        return self

    def order_by(self, order: SortOrder | str) -> QueryBuilder:
        self._order = order
        return self

    def limit(self, limit: int) -> QueryBuilder:
        self._limit = limit
        return self

    def offset(self, offset: int) -> QueryBuilder:
        self._offset = offset
        return self

    def timezone(self, zone: tzinfo | str) -> QueryBuilder:
        self._timezone = zone
        return self

    def build(self) -> Query:
        """Render the collected parts into a Query."""
        parts = []
        if self._select:
            parts.append("SELECT " + ", ".join(e.build() for e in self._select))
        else:
            parts.append("SELECT *")
        if self._from:
            parts.append(" FROM " + ", ".join(f'"{table}"' for table in self._from))
        if self._where is not None:
            parts.append(" WHERE " + self._where.build())
        if self._group_by:
            parts.append(" GROUP BY " + ", ".join(e.build() for e in self._group_by))
        if self._order:
            parts.append(f" ORDER BY time {self._order}")
        if self._limit > 0:
            parts.append(f" LIMIT {self._limit}")
        if self._offset > 0:
            parts.append(f" OFFSET {self._offset}")
        if self._timezone is not None:
            parts.append(f" TZ('{_zone_name(self._timezone)}')")
        return Query(command="".join(parts))