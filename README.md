# geminiclient

Building blocks for talking to an openGemini time-series database:

- a fluent builder for `SELECT` statements, with expressions, conditions,
  grouping, ordering, paging and time zones (`geminiclient.query_builder`,
  `geminiclient.expression`, `geminiclient.condition`,
  `geminiclient.operators`);
- a builder for `CREATE MEASUREMENT` and `SHOW MEASUREMENTS` statements
  (`geminiclient.measurement_builder`);
- a columnar record builder that gathers rows into per-measurement write
  requests (`geminiclient.record`);
- helpers that choose request headers, decompress responses (gzip, zstd,
  snappy) and decode JSON or MessagePack query results into typed objects
  (`geminiclient.codec`, `geminiclient.result`);
- a family of exceptions, all derived from `OpenGeminiError`
  (`geminiclient.errors`).

## Installation

```
pip install geminiclient
```

Python 3.10 or newer is required. `msgpack` and `zstandard` are installed
with it.

## Building queries

```python
from geminiclient.query_builder import QueryBuilder
from geminiclient.expression import FieldExpression, FunctionExpression, ConstantExpression
from geminiclient.condition import ComparisonCondition, CompositeCondition
from geminiclient.operators import ComparisonOperator, LogicalOperator, FunctionEnum, SortOrder

count_level = FunctionExpression(FunctionEnum.COUNT, FieldExpression("water_level"))
where = CompositeCondition(
    LogicalOperator.AND,
    ComparisonCondition("time", ComparisonOperator.GREATER_THAN_OR_EQUALS, "2019-08-18T00:00:00Z"),
    ComparisonCondition("time", ComparisonOperator.LESS_THAN_OR_EQUALS, "2019-08-18T00:30:00Z"),
)

query = (
    QueryBuilder()
    .select(count_level)
    .from_("h2o_feet")
    .where(where)
    .group_by(FunctionExpression(FunctionEnum.TIME, ConstantExpression("12m")))
    .order_by(SortOrder.DESC)
    .build()
)
print(query.command)
# SELECT COUNT("water_level") FROM "h2o_feet" WHERE ("time" >= '2019-08-18T00:00:00Z'
#   AND "time" <= '2019-08-18T00:30:00Z') GROUP BY TIME(12m) ORDER BY time DESC
```

`build()` returns a `Query` dataclass whose `command` holds the text; its
`database`, `retention_policy` and `precision` members are left for the
caller to fill in.

Rendering rules:

- with no `select(...)` the statement starts `SELECT *`;
- table names in `from_(...)` and `FieldExpression` names are double-quoted;
- string values in a `ComparisonCondition` are single-quoted, other values
  are written as they are (booleans as `true`/`false`);
- `CompositeCondition` and `ArithmeticExpression` are wrapped in
  parentheses; `AsExpression` adds `AS "alias"`;
- `limit` and `offset` are written only when greater than zero;
- `timezone` takes a `tzinfo` (for a `zoneinfo.ZoneInfo` its key is used) or
  a zone name, and adds `TZ('America/Chicago')` and the like.

## Measurement statements

```python
from geminiclient.measurement_builder import MeasurementBuilder, FieldType, EngineType, ShardType
from geminiclient.operators import ComparisonOperator

create = (
    MeasurementBuilder()
    .database("weather")
    .measurement("h2o_feet")
    .create()
    .tags(["location"])
    .field_map({"water_level": FieldType.FLOAT64})
    .build()
)
# CREATE MEASUREMENT h2o_feet (location TAG,water_level FLOAT64 FIELD)

show = (
    MeasurementBuilder()
    .database("weather")
    .show()
    .filter(ComparisonOperator.MATCH, "/h2o.*/")
    .build()
)
# SHOW MEASUREMENTS WITH MEASUREMENT =~ /h2o.*/
```

For `create()` the builder also takes `full_text_index()` with
`index_list(...)`, `engine_type(EngineType.COLUMNSTORE)`, `shard_keys(...)`,
`shard_type(ShardType.HASH)` or `ShardType.RANGE`, `primary_key(...)` and
`sort_keys(...)`; these are written after a single `WITH`.

`build()` raises `EmptyDatabaseNameError` when no database is set,
`EmptyTagOrFieldError` when a create statement has neither tags nor fields,
and `OpenGeminiError` when a full-text index has no index list or when
neither `create()` nor `show()` was called.

## Columnar write requests

```python
from geminiclient.record import RecordBuilder, WriteRequestBuilder

rows = RecordBuilder("h2o_feet")
password = "password"
request = (
    WriteRequestBuilder("weather", "autogen")
    .authenticate("user", password)
    .add_record(
        rows.new_line().add_tag("location", "coyote_creek").add_field("water_level", 8.12).build(0),
        rows.new_line().add_tag("location", "santa_monica").add_field("water_level", 2.06).build(0),
    )
    .build()
)

columns = request.records["h2o_feet"]
print(columns.row_count)          # 2
print(list(columns.columns))      # ['location', 'water_level', 'time']
```

- `RecordBuilder(measurement)` raises `EmptyMeasurementNameError` for an
  empty name; `new_line()` starts a fresh line of the same measurement.
- `build(timestamp)` sets the line's time in nanoseconds; `0` means the
  time the line is added to the request.
- Tags or fields named `time`, or with an empty name, are collected as
  `InvalidTimeColumnError` / `EmptyNameError` and raised by
  `WriteRequestBuilder.build()`, together with any other problem found while
  adding lines (for example a field value of a type no column holds raises
  `UnknownFieldTypeError`).
- A row that lacks a column present in other rows gets `None` there.
- An empty retention policy becomes `autogen`.
- `WriteRequest.records` maps each measurement to a `MeasurementColumns`
  whose `columns` are ordered by name with `time` last; each `Column` has a
  `name`, a `ColumnKind` and its `values`.
- `WriteRequestBuilder.build()` clears the gathered rows, whether it
  succeeds or raises.

## Decoding query responses

```python
from geminiclient.codec import parse_query_response, request_headers, ContentType, CompressMethod

headers = request_headers(ContentType.MSGPACK, CompressMethod.ZSTD)
# {'Accept': 'application/x-msgpack', 'Accept-Encoding': 'zstd'}

result = parse_query_response(
    200,
    "OK",
    {"Content-Type": "application/json"},
    b'{"results": [{"series": [{"name": "measurements", "columns": ["name"], "values": [["h2o_feet"]]}]}]}',
)
result.raise_for_error()
print(result.measurements())      # ['h2o_feet']
```

- `parse_query_response` raises `QueryError` for any status other than 200,
  undoes a `gzip`, `zstd` or `snappy` (framed stream) `Content-Encoding`, and
  decodes `application/json` or `application/x-msgpack` bodies; other content
  types and corrupt bodies raise `OpenGeminiError`.
- `decompress_body(encoding, body)` and `deserialize_body(content_type, body)`
  are the two steps on their own.
- `auth_required(path, method)` tells whether a request needs credentials:
  `GET`/`HEAD` on `/ping` and `/status`, and `OPTIONS` on `/query`, do not.
- `QueryResult.raise_for_error()` raises `QueryError` with the first error
  message in the result; `QueryResult.retention_policies()` turns the output
  of `SHOW RETENTION POLICIES` into `RetentionPolicy` objects, and
  `RetentionPolicy.from_values(row)` reads a single row (returning `None` if
  it does not fit).

## What this package does not do

- It opens no connections: there is no HTTP or gRPC client, no pinging,
  load balancing or batching of writes. You send requests with the HTTP
  library of your choice and hand the answers to `parse_query_response`.
- It does not encode points in line protocol, and has no helpers for
  timestamp precision.
- It has no builders for `SHOW TAG KEYS`, `SHOW TAG VALUES` or `SHOW SERIES`.
- A `WriteRequest` is an in-memory object; it is not serialised to a wire
  format.
- It installs no command-line programs.

## Running the tests

```
pip install -e ".[test]"
pytest
```