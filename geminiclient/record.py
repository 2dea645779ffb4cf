"""Column-oriented records and the write requests that carry them."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, NamedTuple

from .codec import CompressMethod
from .errors import (
    EmptyNameError,
    EmptyRecordError,
    InvalidFieldTypeError,
    InvalidTimeColumnError,
    OpenGeminiError,
    UnknownFieldTypeError,
    check_database_name,
    check_measurement_name,
)

TIME_FIELD = "time"
DEFAULT_RETENTION_POLICY = "autogen"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


class ColumnKind(Enum):
    """Data type of a column in a record."""

    UNKNOWN = "unknown"
    INT = "integer"
    UINT = "unsigned"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    TAG = "tag"


_NULLABLE_KINDS = frozenset(
    {
        ColumnKind.TAG,
        ColumnKind.STRING,
        ColumnKind.INT,
        ColumnKind.UINT,
        ColumnKind.BOOLEAN,
        ColumnKind.FLOAT,
    }
)


def _kind_of(value: Any) -> ColumnKind:
    if isinstance(value, str):
        return ColumnKind.STRING
    if isinstance(value, bool):
        return ColumnKind.BOOLEAN
    if isinstance(value, float):
        return ColumnKind.FLOAT
    if isinstance(value, int):
        return ColumnKind.INT
    return ColumnKind.UNKNOWN


def _stored_value(value: Any) -> Any:
    """Normalise a field value for storage, raising for types no column holds."""
    if isinstance(value, (str, bool, float)):
        return value
    if isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
        if _INT64_MAX < value <= _UINT64_MAX:
            return value - 2**64
    raise UnknownFieldTypeError()


@dataclass
class Column:
    """A named, typed column; ``None`` marks a null row."""

    name: str
    kind: ColumnKind
    values: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)


class _Entry(NamedTuple):
    name: str
    kind: ColumnKind
    value: Any


def _column_order(name: str) -> tuple[bool, str]:
    return (name == TIME_FIELD, name)


@dataclass
class MeasurementColumns:
    """The rows of one measurement, stored column by column."""

    row_count: int = 0
    min_time: int = 0
    max_time: int = 0
    columns: dict[str, Column] = field(default_factory=dict)
    _filled: dict[str, bool] = field(default_factory=dict, init=False, repr=False)

    def append_record(self, line: RecordBuilder) -> None:
        """Append one line as a new row, padding absent columns with nulls."""
        for tag in line._tags:
            column = self.columns.get(tag.name) or self._create_column(tag.name, ColumnKind.TAG)
            column.values.append(tag.value)
            self._filled[tag.name] = True
            self.columns[tag.name] = column

        for entry in line._fields:
            column = self.columns.get(entry.name) or self._create_column(entry.name, entry.kind)
            column.values.append(_stored_value(entry.value))
            self._filled[entry.name] = True
            self.columns[entry.name] = column

        self._append_timestamp(line.timestamp)
        self.row_count += 1
        self._fill_missing()

    def _create_column(self, name: str, kind: ColumnKind) -> Column:
        if kind not in _NULLABLE_KINDS:
            raise InvalidFieldTypeError()
        return Column(name, kind, [None] * self.row_count)

    def _append_timestamp(self, timestamp: int) -> None:
        if timestamp == 0:
            timestamp = time.time_ns()
        column = self.columns.get(TIME_FIELD) or self._create_column(TIME_FIELD, ColumnKind.INT)
        column.values.append(timestamp)
        self.columns[TIME_FIELD] = column
        self.min_time = min(self.min_time, timestamp)
        self.max_time = max(self.max_time, timestamp)

    def _fill_missing(self) -> None:
        for name, filled in self._filled.items():
            column = self.columns.get(name)
            if filled or column is None:
                continue
            missing = self.row_count - len(column)
            if missing:
                column.values.extend([None] * missing)
        self._filled = dict.fromkeys(self._filled, False)

    def _seal(self) -> None:
        """Check the columns line up and order them by name, time last."""
        if not self.columns:
            raise EmptyRecordError()
        for column in self.columns.values():
            if len(column) != self.row_count:
                raise OpenGeminiError(
                    f"column {column.name} has {len(column)} values for {self.row_count} rows"
                )
        self.columns = {
            name: self.columns[name] for name in sorted(self.columns, key=_column_order)
        }


class RecordBuilder:
    """Collects the tags, fields and time of one line of a measurement.

    Problems found while adding tags or fields are kept and raised when the
    line is turned into a write request.
    """

    def __init__(self, measurement: str) -> None:
        self.measurement = check_measurement_name(measurement)
        self.timestamp = 0
        self.compress = CompressMethod.NONE
        self._tags: list[_Entry] = []
        self._fields: list[_Entry] = []
        self._errors: list[OpenGeminiError] = []

    @property
    def errors(self) -> tuple[OpenGeminiError, ...]:
        return tuple(self._errors)

    def new_line(self) -> RecordBuilder:
        """Start an empty line of the same measurement."""
        return RecordBuilder(self.measurement)

    def compress_method(self, method: CompressMethod) -> RecordBuilder:
        self.compress = method
        return self

    def _checked_name(self, key: str, what: str) -> bool:
        if not key:
            self._errors.append(EmptyNameError(f"miss {what} name: {EmptyNameError.default_message}"))
            return False
        if key == TIME_FIELD:
            self._errors.append(
                InvalidTimeColumnError(
                    f"{what} name {key} invalid: {InvalidTimeColumnError.default_message}"
                )
            )
            return False
        return True

    def add_tag(self, key: str, value: str) -> RecordBuilder:
        if self._checked_name(key, "tag"):
            self._tags.append(_Entry(key, ColumnKind.TAG, value))
        return self

    def add_tags(self, tags: Mapping[str, str]) -> RecordBuilder:
        for key, value in tags.items():
            self.add_tag(key, value)
        return self

    def add_field(self, key: str, value: Any) -> RecordBuilder:
        if self._checked_name(key, "field"):
            self._fields.append(_Entry(key, _kind_of(value), value))
        return self

    def add_fields(self, fields: Mapping[str, Any]) -> RecordBuilder:
        for key, value in fields.items():
            self.add_field(key, value)
        return self

    def build(self, timestamp: int) -> RecordBuilder:
        """Set the line's time in nanoseconds; zero means the time it is added."""
        self.timestamp = timestamp
        return self


@dataclass
class WriteRequest:
    """Records of one or more measurements bound for a database."""

    database: str
    retention_policy: str
    username: str = ""
    password: str = ""
    records: dict[str, MeasurementColumns] = field(default_factory=dict)


def _joined(errors: list[OpenGeminiError]) -> OpenGeminiError:
    if len(errors) == 1:
        return errors[0]
    return OpenGeminiError("\n".join(str(error) for error in errors))


class WriteRequestBuilder:
    """Gathers record lines into a WriteRequest."""

    def __init__(self, database: str, retention_policy: str = "") -> None:
        self._database = check_database_name(database)
        self._retention_policy = retention_policy
        self._username = ""
        self._password = ""
        self._transform: dict[str, MeasurementColumns] = {}
        self._errors: list[OpenGeminiError] = []

    def authenticate(self, username: str, password: str) -> WriteRequestBuilder:
        self._username = username
        self._password = password
        return self

    def add_record(self, *lines: Any) -> WriteRequestBuilder:
        """Append lines; anything that is not a RecordBuilder is ignored."""
        for line in lines:
            if not isinstance(line, RecordBuilder):
                continue
            if line.errors:
                self._errors.extend(line.errors)
                continue
            columns = self._transform.get(line.measurement) or MeasurementColumns()
            try:
                columns.append_record(line)
            except OpenGeminiError as exc:
                self._errors.append(exc)
                continue
            self._transform[line.measurement] = columns
        return self

    def build(self) -> WriteRequest:
        """Produce the request and clear the gathered rows."""
        try:
            if self._errors:
                raise _joined(self._errors)
            if not self._retention_policy:
                self._retention_policy = DEFAULT_RETENTION_POLICY
            records: dict[str, MeasurementColumns] = {}
            for measurement, columns in self._transform.items():
                try:
                    columns._seal()
                except OpenGeminiError as exc:
                    raise OpenGeminiError(f"failed to convert records: {exc}") from exc
                records[measurement] = columns
            return WriteRequest(
                database=self._database,
                retention_policy=self._retention_policy,
                username=self._username,
                password=self._password,
                records=records,
            )
        finally:
            self._transform = {}