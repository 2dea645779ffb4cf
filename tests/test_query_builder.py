from datetime import timezone

from geminiclient.condition import ComparisonCondition, CompositeCondition
from geminiclient.expression import (
    ArithmeticExpression,
    AsExpression,
    ConstantExpression,
    FieldExpression,
    FunctionExpression,
)
from geminiclient.operators import (
    ArithmeticOperator,
    ComparisonOperator,
    FunctionEnum,
    LogicalOperator,
    SortOrder,
)
from geminiclient.query_builder import QueryBuilder


def _time_range(end="2019-08-18T00:30:00Z"):
    start = ComparisonCondition(
        "time", ComparisonOperator.GREATER_THAN_OR_EQUALS, "2019-08-18T00:00:00Z"
    )
    stop = ComparisonCondition("time", ComparisonOperator.LESS_THAN_OR_EQUALS, end)
    return start, stop


def _santa_monica_range():
    location = ComparisonCondition("location", ComparisonOperator.EQUALS, "santa_monica")
    start, stop = _time_range("2019-08-18T00:18:00Z")
    return CompositeCondition(LogicalOperator.AND, location, start, stop)


SANTA_MONICA_WHERE = (
    " WHERE (\"location\" = 'santa_monica' AND \"time\" >= '2019-08-18T00:00:00Z' "
    "AND \"time\" <= '2019-08-18T00:18:00Z') TZ('America/Chicago')"
)


def test_select_all_from_table():
    query = QueryBuilder().from_("h2o_feet").build()
    assert query.command == 'SELECT * FROM "h2o_feet"'


def test_select_top_from_table():
    top = FunctionExpression(FunctionEnum.TOP, FieldExpression("water_level"), ConstantExpression(5))
    query = QueryBuilder().select(top).from_("h2o_feet").build()
    assert query.command == 'SELECT TOP("water_level", 5) FROM "h2o_feet"'


def test_select_last_and_tag_from_table():
    last = FunctionExpression(FunctionEnum.LAST, FieldExpression("water_level"))
    query = QueryBuilder().select(last, FieldExpression("location")).from_("h2o_feet").build()
    assert query.command == 'SELECT LAST("water_level"), "location" FROM "h2o_feet"'


def test_select_with_arithmetic():
    times_four = ArithmeticExpression(
        ArithmeticOperator.MULTIPLY, FieldExpression("water_level"), ConstantExpression(4)
    )
    plus_two = ArithmeticExpression(ArithmeticOperator.ADD, times_four, ConstantExpression(2))
    query = QueryBuilder().select(plus_two).from_("h2o_feet").limit(10).build()
    assert query.command == 'SELECT (("water_level" * 4) + 2) FROM "h2o_feet" LIMIT 10'


def test_select_where_condition():
    cond = ComparisonCondition("water_level", ComparisonOperator.GREATER_THAN, 8)
    query = QueryBuilder().from_("h2o_feet").where(cond).build()
    assert query.command == 'SELECT * FROM "h2o_feet" WHERE "water_level" > 8'


def test_select_with_complex_where_condition():
    location = ComparisonCondition("location", ComparisonOperator.NOT_EQUALS, "santa_monica")
    lower = ComparisonCondition("water_level", ComparisonOperator.LESS_THAN, -0.57)
    higher = ComparisonCondition("water_level", ComparisonOperator.GREATER_THAN, 9.95)
    level = CompositeCondition(LogicalOperator.OR, lower, higher)
    final = CompositeCondition(LogicalOperator.AND, location, level)
    query = (
        QueryBuilder().select(FieldExpression("water_level")).from_("h2o_feet").where(final).build()
    )
    assert query.command == (
        'SELECT "water_level" FROM "h2o_feet" WHERE ("location" <> \'santa_monica\' '
        'AND ("water_level" < -0.57 OR "water_level" > 9.95))'
    )


def test_select_with_group_by():
    mean = FunctionExpression(FunctionEnum.MEAN, FieldExpression("water_level"))
    query = (
        QueryBuilder().select(mean).from_("h2o_feet").group_by(FieldExpression("location")).build()
    )
    assert query.command == 'SELECT MEAN("water_level") FROM "h2o_feet" GROUP BY "location"'


def test_select_with_time_range_and_group_by_time():
    count = FunctionExpression(FunctionEnum.COUNT, FieldExpression("water_level"))
    time_range = CompositeCondition(LogicalOperator.AND, *_time_range())
    by_time = FunctionExpression(FunctionEnum.TIME, ConstantExpression("12m"))
    query = (
        QueryBuilder().select(count).from_("h2o_feet").where(time_range).group_by(by_time).build()
    )
    assert query.command == (
        'SELECT COUNT("water_level") FROM "h2o_feet" WHERE ("time" >= \'2019-08-18T00:00:00Z\' '
        "AND \"time\" <= '2019-08-18T00:30:00Z') GROUP BY TIME(12m)"
    )


def test_select_with_time_range_and_order_by():
    time_range = CompositeCondition(LogicalOperator.AND, *_time_range())
    query = (
        QueryBuilder()
        .select(FieldExpression("water_level"), FieldExpression("location"))
        .from_("h2o_feet")
        .where(time_range)
        .order_by(SortOrder.DESC)
        .build()
    )
    assert query.command == (
        'SELECT "water_level", "location" FROM "h2o_feet" WHERE ("time" >= '
        "'2019-08-18T00:00:00Z' AND \"time\" <= '2019-08-18T00:30:00Z') ORDER BY time DESC"
    )


def test_select_with_time_range_group_by_and_order_by():
    count = FunctionExpression(FunctionEnum.COUNT, FieldExpression("water_level"))
    time_range = CompositeCondition(LogicalOperator.AND, *_time_range())
    by_time = FunctionExpression(FunctionEnum.TIME, ConstantExpression("12m"))
    query = (
        QueryBuilder()
        .select(count)
        .from_("h2o_feet")
        .where(time_range)
        .group_by(by_time)
        .order_by(SortOrder.DESC)
        .build()
    )
    assert query.command == (
        'SELECT COUNT("water_level") FROM "h2o_feet" WHERE ("time" >= \'2019-08-18T00:00:00Z\' '
        "AND \"time\" <= '2019-08-18T00:30:00Z') GROUP BY TIME(12m) ORDER BY time DESC"
    )


def test_select_with_limit_and_offset():
    query = (
        QueryBuilder()
        .select(FieldExpression("water_level"), FieldExpression("location"))
        .from_("h2o_feet")
        .limit(3)
        .offset(3)
        .build()
    )
    assert query.command == 'SELECT "water_level", "location" FROM "h2o_feet" LIMIT 3 OFFSET 3'


def test_select_with_where_and_timezone():
    query = (
        QueryBuilder()
        .select(FieldExpression("water_level"))
        .from_("h2o_feet")
        .where(_santa_monica_range())
        .timezone("America/Chicago")
        .build()
    )
    assert query.command == 'SELECT "water_level" FROM "h2o_feet"' + SANTA_MONICA_WHERE


def test_select_with_as_expression():
    alias = AsExpression("WL", FieldExpression("water_level"))
    query = (
        QueryBuilder()
        .select(alias)
        .from_("h2o_feet")
        .where(_santa_monica_range())
        .timezone("America/Chicago")
        .build()
    )
    assert query.command == 'SELECT "water_level" AS "WL" FROM "h2o_feet"' + SANTA_MONICA_WHERE


def test_select_with_aggregate():
    count = FunctionExpression(FunctionEnum.COUNT, FieldExpression("water_level"))
    query = (
        QueryBuilder()
        .select(AsExpression("WL", count))
        .from_("h2o_feet")
        .where(_santa_monica_range())
        .timezone("America/Chicago")
        .build()
    )
    assert query.command == (
        'SELECT COUNT("water_level") AS "WL" FROM "h2o_feet"' + SANTA_MONICA_WHERE
    )


def test_timezone_from_tzinfo():
    query = QueryBuilder().from_("h2o_feet").timezone(timezone.utc).build()
    assert query.command == "SELECT * FROM \"h2o_feet\" TZ('UTC')"


def test_non_positive_limit_and_offset_are_omitted():
    query = QueryBuilder().from_("h2o_feet").limit(0).offset(-1).build()
    assert query.command == 'SELECT * FROM "h2o_feet"'


def test_multiple_tables_are_quoted_and_joined():
    query = QueryBuilder().from_("h2o_feet", "h2o_quality").build()
    assert query.command == 'SELECT * FROM "h2o_feet", "h2o_quality"'
    assert query.database == ""