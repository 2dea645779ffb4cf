"""Operators, function names and sort orders used when building queries."""

from enum import Enum


class _TextEnum(str, Enum):
    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


class ComparisonOperator(_TextEnum):
    """Operators comparing a column with a value."""

    EQUALS = "="
    NOT_EQUALS = "<>"
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_OR_EQUALS = ">="
    LESS_THAN_OR_EQUALS = "<="
    MATCH = "=~"
    NOT_MATCH = "!~"


class LogicalOperator(_TextEnum):
    """Operators joining conditions."""

    AND = "AND"
    OR = "OR"


class ArithmeticOperator(_TextEnum):
    """Operators combining expressions arithmetically."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class FunctionEnum(_TextEnum):
    """Functions available in select and group-by expressions."""

    MEAN = "MEAN"
    COUNT = "COUNT"
    SUM = "SUM"
    MIN = "MIN"
    MAX = "MAX"
    TIME = "TIME"
    TOP = "TOP"
    LAST = "LAST"


class SortOrder(_TextEnum):
    """Direction of an ordering."""

    ASC = "ASC"
    DESC = "DESC"