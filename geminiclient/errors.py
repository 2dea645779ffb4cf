"""Exception types raised by the client and small argument checks."""


class OpenGeminiError(Exception):
    """Base class for every error raised by this package."""

    default_message = "opengemini client error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class EmptyDatabaseNameError(OpenGeminiError, ValueError):
    """A database name was required but empty."""

    default_message = "empty database name"


class EmptyMeasurementNameError(OpenGeminiError, ValueError):
    """A measurement name was required but empty."""

    default_message = "empty measurement name"


class EmptyTagOrFieldError(OpenGeminiError, ValueError):
    """A measurement definition has neither tags nor fields."""

    default_message = "empty tag or field"


class EmptyTagKeyError(OpenGeminiError, ValueError):
    """A tag key was required but none was given."""

    default_message = "empty tag key"


class UnsupportedFieldValueTypeError(OpenGeminiError, TypeError):
    """A field value has a type the line protocol cannot carry."""

    default_message = "unsupported field value type"


class InvalidTimeColumnError(OpenGeminiError, ValueError):
    """A tag or field was named ``time``."""

    default_message = "key can't be time"


class EmptyNameError(OpenGeminiError, ValueError):
    """A tag or field name was empty."""

    default_message = "empty name not allowed"


class InvalidFieldTypeError(OpenGeminiError, TypeError):
    """A column has a type that cannot hold null values."""

    default_message = "invalid field type"


class UnknownFieldTypeError(OpenGeminiError, TypeError):
    """A field value has a type no column can store."""

    default_message = "unknown field type"


class EmptyRecordError(OpenGeminiError, ValueError):
    """A record holds no columns."""

    default_message = "empty record"


class QueryError(OpenGeminiError):
    """The server answered a query with an error."""

    default_message = "query failed"


def check_database_name(database: str) -> str:
    """Return ``database`` if it is usable, else raise EmptyDatabaseNameError."""
    if not database:
        raise EmptyDatabaseNameError()
    return database


def check_measurement_name(measurement: str) -> str:
    """Return ``measurement`` if it is usable, else raise EmptyMeasurementNameError."""
    if not measurement:
        raise EmptyMeasurementNameError()
    return measurement