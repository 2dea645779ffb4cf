import pytest

from geminiclient.errors import (
    EmptyDatabaseNameError,
    EmptyMeasurementNameError,
    EmptyNameError,
    InvalidFieldTypeError,
    InvalidTimeColumnError,
    OpenGeminiError,
    QueryError,
    UnknownFieldTypeError,
    check_database_name,
    check_measurement_name,
)


def test_check_database_name_rejects_empty():
    with pytest.raises(EmptyDatabaseNameError):
        check_database_name("")


def test_check_database_name_returns_name():
    assert check_database_name("db0") == "db0"


def test_check_measurement_name_rejects_empty():
    with pytest.raises(EmptyMeasurementNameError):
        check_measurement_name("")


def test_check_measurement_name_returns_name():
    assert check_measurement_name("h2o_feet") == "h2o_feet"


@pytest.mark.parametrize(
    "cls, message",
    [
        (InvalidTimeColumnError, "key can't be time"),
        (EmptyNameError, "empty name not allowed"),
        (InvalidFieldTypeError, "invalid field type"),
        (UnknownFieldTypeError, "unknown field type"),
    ],
)
def test_default_messages(cls, message):
    assert str(cls()) == message


def test_custom_message_overrides_default():
    err = QueryError("measurement not found")
    assert str(err) == "measurement not found"


def test_errors_share_base_class():
    with pytest.raises(OpenGeminiError):
        check_database_name("")


def test_empty_database_name_is_value_error():
    with pytest.raises(ValueError):
        check_database_name("")