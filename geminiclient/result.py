"""Query results as returned by the server, and helpers to read them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .errors import QueryError

RP_COLUMN_LEN = 8

SeriesValue = list[Any]


@dataclass
class Series:
    """One series of a result: a name, its tags, column names and rows."""

    name: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    columns: list[str] = field(default_factory=list)
    values: list[SeriesValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Series:
        return cls(
            name=data.get("name") or "",
            tags=dict(data.get("tags") or {}),
            columns=list(data.get("columns") or []),
            values=[list(row) for row in data.get("values") or []],
        )


@dataclass
class SeriesResult:
    """The result of one statement: its series, or an error message."""

    series: list[Series] = field(default_factory=list)
    error: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SeriesResult:
        return cls(
            series=[Series.from_dict(s) for s in data.get("series") or []],
            error=data.get("error") or "",
        )


@dataclass
class RetentionPolicy:
    """A retention policy as listed by SHOW RETENTION POLICIES."""

    name: str = ""
    duration: str = ""
    shard_group_duration: str = ""
    hot_duration: str = ""
    warm_duration: str = ""
    index_duration: str = ""
    replica_num: int = 0
    is_default: bool = False

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> RetentionPolicy | None:
        """Build a policy from one result row; None if the row does not fit."""
        if len(values) < RP_COLUMN_LEN:
            return None
        strings = values[:6]
        if not all(isinstance(v, str) for v in strings):
            return None
        replica = values[6]
        if isinstance(replica, bool) or not isinstance(replica, (int, float)):
            return None
        is_default = values[7]
        if not isinstance(is_default, bool):
            return None
        name, duration, shard, hot, warm, index = strings
        return cls(
            name=name,
            duration=duration,
            shard_group_duration=shard,
            hot_duration=hot,
            warm_duration=warm,
            index_duration=index,
            replica_num=int(replica),
            is_default=is_default,
        )


@dataclass
class QueryResult:
    """The top-level answer to a query."""

    results: list[SeriesResult] = field(default_factory=list)
    error: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueryResult:
        """Build a result from a decoded JSON or msgpack document."""
        return cls(
            results=[SeriesResult.from_dict(r) for r in data.get("results") or []],
            error=data.get("error") or "",
        )

    def raise_for_error(self) -> None:
        """Raise QueryError with the first error message the result carries."""
        if self.error:
            raise QueryError(self.error)
        for result in self.results:
            if result.error:
                raise QueryError(result.error)

    def _first_rows(self) -> list[SeriesValue]:
        if not self.results or not self.results[0].series:
            return []
        return self.results[0].series[0].values

    def retention_policies(self) -> list[RetentionPolicy]:
        """Read the rows of the first series as retention policies."""
        policies = []
        for row in self._first_rows():
            if len(row) < RP_COLUMN_LEN:
                break
            policy = RetentionPolicy.from_values(row)
            if policy is not None:
                policies.append(policy)
        return policies

    def measurements(self) -> list[str]:
        """Read the first column of the first series as measurement names."""
        return [row[0] for row in self._first_rows() if row and isinstance(row[0], str)]