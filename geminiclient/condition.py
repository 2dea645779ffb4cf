"""Conditions rendered into WHERE clauses."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .expression import _format_literal
from .operators import ComparisonOperator, LogicalOperator


class Condition(ABC):
    """Something that renders to a boolean query clause."""

    @abstractmethod
    def build(self) -> str:
        """Render the condition as query text."""


@dataclass
class ComparisonCondition(Condition):
    """Compares a column with a value; string values are single-quoted."""

    column: str
    operator: ComparisonOperator | str
    value: Any

    def build(self) -> str:
        if isinstance(self.value, str):
            return f"\"{self.column}\" {self.operator} '{self.value}'"
        return f'"{self.column}" {self.operator} {_format_literal(self.value)}'


@dataclass(init=False)
class CompositeCondition(Condition):
    """Joins conditions with a logical operator inside parentheses."""

    logical_operator: LogicalOperator | str
    conditions: tuple[Condition, ...] = field(default=())

    def __init__(self, logical_operator: LogicalOperator | str, *conditions: Condition) -> None:
        self.logical_operator = logical_operator
        self.conditions = tuple(conditions)

    def build(self) -> str:
        joiner = f" {self.logical_operator} "
        return "(" + joiner.join(c.build() for c in self.conditions) + ")"