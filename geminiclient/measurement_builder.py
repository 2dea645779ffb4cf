"""Builder for CREATE MEASUREMENT and SHOW MEASUREMENTS statements."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping

from .condition import ComparisonCondition
from .errors import (
    EmptyTagOrFieldError,
    OpenGeminiError,
    check_database_name,
)
from .operators import ComparisonOperator


class _Text(str, Enum):
    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


class ShardType(_Text):
    """How data of a measurement is split between shards."""

    HASH = "HASH"
    RANGE = "RANGE"


class FieldType(_Text):
    """Data type of a field in a measurement schema."""

    INT64 = "INT64"
    FLOAT64 = "FLOAT64"
    STRING = "STRING"
    BOOL = "BOOL"


class EngineType(_Text):
    """Storage engine of a measurement."""

    COLUMNSTORE = "columnstore"


class MeasurementCommand(_Text):
    """The statement a MeasurementBuilder renders."""

    CREATE = "CREATE"
    SHOW = "SHOW"


def _text(value: object) -> str:
    return str(getattr(value, "value", value))


class MeasurementBuilder:
    """Collects the parts of a measurement statement and renders it.

    Call ``create()`` or ``show()`` to pick the statement, then ``build()``.
    """

    def __init__(self) -> None:
        self._command: MeasurementCommand | None = None
        self._database = ""
        self._retention_policy = ""
        self._measurement = ""
        self._filter: ComparisonCondition | None = None
        self._tags: list[str] = []
        self._fields: list[str] = []
        self._shard_type: ShardType | str = ""
        self._shard_keys: list[str] = []
        self._index_type = ""
        self._index_list: list[str] = []
        self._engine_type: EngineType | str = ""
        self._primary_key: list[str] = []
        self._sort_keys: list[str] = []

    def database(self, database: str) -> MeasurementBuilder:
        self._database = database
        return self

    def measurement(self, measurement: str) -> MeasurementBuilder:
        self._measurement = measurement
        return self

    def retention_policy(self, rp: str) -> MeasurementBuilder:
        self._retention_policy = rp
        return self

    def show(self) -> MeasurementBuilder:
        self._command = MeasurementCommand.SHOW
        return self

    def create(self) -> MeasurementBuilder:
        self._command = MeasurementCommand.CREATE
        return self

    def tags(self, tag_list: Iterable[str]) -> MeasurementBuilder:
        """Append tags to the schema."""
        self._tags.extend(f"{tag} TAG" for tag in tag_list)
        return self

    def field_map(self, fields: Mapping[str, FieldType | str]) -> MeasurementBuilder:
        """Append fields, each with its data type, to the schema."""
        self._fields.extend(f"{key} {_text(kind)} FIELD" for key, kind in fields.items())
        return self

    def shard_keys(self, shard_keys: Iterable[str]) -> MeasurementBuilder:
        self._shard_keys = list(shard_keys)
        return self

    def shard_type(self, shard_type: ShardType | str) -> MeasurementBuilder:
        self._shard_type = shard_type
        return self

    def full_text_index(self) -> MeasurementBuilder:
        self._index_type = "text"
        return self

    def index_list(self, index_list: Iterable[str]) -> MeasurementBuilder:
        self._index_list = list(index_list)
        return self

    def engine_type(self, engine_type: EngineType | str) -> MeasurementBuilder:
        self._engine_type = engine_type
        return self

    def primary_key(self, primary_key: Iterable[str]) -> MeasurementBuilder:
        self._primary_key = list(primary_key)
        return self

    def sort_keys(self, sort_keys: Iterable[str]) -> MeasurementBuilder:
        self._sort_keys = list(sort_keys)
        return self

    def filter(self, operator: ComparisonOperator | str, regex: str) -> MeasurementBuilder:
        """Restrict SHOW MEASUREMENTS to names matching or equal to ``regex``."""
        self._filter = ComparisonCondition("MEASUREMENT", operator, regex)
        return self

    def build(self) -> str:
        """Render the statement, raising if it is incomplete."""
        check_database_name(self._database)
        if self._command is MeasurementCommand.CREATE:
            return self._build_create()
        if self._command is MeasurementCommand.SHOW:
            return self._build_show()
        command = "" if self._command is None else _text(self._command)
        raise OpenGeminiError(f"invalid command: {command}")

    def _build_create(self) -> str:
        if not self._tags and not self._fields:
            raise EmptyTagOrFieldError()
        schema = ",".join(self._tags + self._fields)
        parts = [f"CREATE MEASUREMENT {self._measurement} ({schema})"]
        if self._index_type and not self._index_list:
            raise OpenGeminiError("empty index list")

        options = []
        if self._index_type:
            options.append(" INDEXTYPE " + self._index_type)
            options.append(" INDEXLIST " + ",".join(self._index_list))
        if self._engine_type:
            options.append(" ENGINETYPE = " + _text(self._engine_type))
        if self._shard_keys:
            options.append(" SHARDKEY " + ",".join(self._shard_keys))
        if self._shard_type:
            options.append(" TYPE " + _text(self._shard_type))
        if self._primary_key:
            options.append(" PRIMARYKEY " + ",".join(self._primary_key))
        if self._sort_keys:
            options.append(" SORTKEY " + ",".join(self._sort_keys))
        if options:
            parts.append(" WITH ")
            parts.extend(options)
        return "".join(parts)

    def _build_show(self) -> str:
        statement = "SHOW MEASUREMENTS"
        if self._filter is not None:
            statement += (
                f" WITH MEASUREMENT {_text(self._filter.operator)} {self._filter.value}"
            )
        return statement