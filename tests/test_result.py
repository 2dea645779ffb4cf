import pytest

from geminiclient.errors import QueryError
from geminiclient.result import QueryResult, RetentionPolicy, Series, SeriesResult


def _rp_row(name="autogen", default=True):
    return [name, "7200h0m0s", "2h0m0s", "0s", "0s", "4h0m0s", 1, default]


def test_from_dict_reads_nested_series():
    doc = {
        "results": [
            {
                "series": [
                    {
                        "name": "h2o_feet",
                        "tags": {"location": "santa_monica"},
                        "columns": ["time", "water_level"],
                        "values": [[1, 2.5], [2, 3.5]],
                    }
                ]
            }
        ]
    }
    result = QueryResult.from_dict(doc)
    series = result.results[0].series[0]
    assert series.name == "h2o_feet"
    assert series.tags == {"location": "santa_monica"}
    assert series.columns == ["time", "water_level"]
    assert series.values == [[1, 2.5], [2, 3.5]]
    assert result.error == ""


def test_from_dict_with_missing_keys_gives_empty_result():
    result = QueryResult.from_dict({})
    assert result.results == []
    assert result.error == ""


def test_raise_for_error_top_level():
    result = QueryResult.from_dict({"error": "boom"})
    with pytest.raises(QueryError, match="boom"):
        result.raise_for_error()


def test_raise_for_error_statement_level():
    result = QueryResult.from_dict(
        {"results": [{"series": []}, {"error": "measurement not found"}]}
    )
    with pytest.raises(QueryError, match="measurement not found"):
        result.raise_for_error()


def test_raise_for_error_clean_result_returns_none():
    result = QueryResult.from_dict({"results": [{"series": []}]})
    assert result.raise_for_error() is None


def test_retention_policy_from_values():
    policy = RetentionPolicy.from_values(_rp_row())
    assert policy == RetentionPolicy(
        name="autogen",
        duration="7200h0m0s",
        shard_group_duration="2h0m0s",
        hot_duration="0s",
        warm_duration="0s",
        index_duration="4h0m0s",
        replica_num=1,
        is_default=True,
    )


def test_retention_policy_replica_float_is_truncated():
    row = _rp_row()
    row[6] = 3.0
    policy = RetentionPolicy.from_values(row)
    assert policy.replica_num == 3


@pytest.mark.parametrize(
    "index,bad",
    [(0, 5), (1, None), (5, 1.0), (6, "1"), (6, True), (7, "true")],
)
def test_retention_policy_rejects_wrong_types(index, bad):
    row = _rp_row()
    row[index] = bad
    assert RetentionPolicy.from_values(row) is None


def test_retention_policy_rejects_short_row():
    assert RetentionPolicy.from_values(_rp_row()[:7]) is None


def test_retention_policies_skips_bad_rows_and_stops_on_short():
    bad = _rp_row("broken")
    bad[7] = "yes"
    rows = [_rp_row("a", False), bad, _rp_row("b"), ["short"], _rp_row("c")]
    result = QueryResult(results=[SeriesResult(series=[Series(values=rows)])])
    assert [p.name for p in result.retention_policies()] == ["a", "b"]


def test_retention_policies_empty_when_no_series():
    assert QueryResult().retention_policies() == []
    assert QueryResult(results=[SeriesResult()]).retention_policies() == []


def test_measurements_keeps_string_names():
    rows = [["cpu"], [42], ["mem"]]
    result = QueryResult(results=[SeriesResult(series=[Series(values=rows)])])
    assert result.measurements() == ["cpu", "mem"]


def test_measurements_empty_when_no_series():
    assert QueryResult().measurements() == []