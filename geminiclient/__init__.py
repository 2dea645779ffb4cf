"""Query and measurement statement builders, columnar write requests and query response decoding for openGemini."""

__version__ = "0.1.0"