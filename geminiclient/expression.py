"""Expressions rendered into SELECT and GROUP BY clauses."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .operators import ArithmeticOperator, FunctionEnum

ConstantValue = Union[bool, int, float, str]


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    magnitude = len(digits) + exponent - 1
    if magnitude < -4 or magnitude >= 21:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if magnitude < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(magnitude):02d}"
    if exponent >= 0:
        return sign + digits + "0" * exponent
    point = len(digits) + exponent
    if point > 0:
        return sign + digits[:point] + "." + digits[point:]
    return sign + "0." + "0" * (-point) + digits


def _format_literal(value: object) -> str:
    """Render a literal value the way the query language expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


class Expression(ABC):
    """Something that renders to a query expression."""

    @abstractmethod
    def build(self) -> str:
        """Render the expression as query text."""


@dataclass
class ConstantExpression(Expression):
    """A literal bool, int, float or string, written unquoted."""

    value: ConstantValue

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bool, int, float, str)):
            raise TypeError(
                f"constant must be bool, int, float or str, not {type(self.value).__name__}"
            )

    def build(self) -> str:
        return _format_literal(self.value)


@dataclass
class FieldExpression(Expression):
    """A double-quoted column name."""

    field: str

    def build(self) -> str:
        return f'"{self.field}"'


@dataclass(init=False)
class FunctionExpression(Expression):
    """A function call over argument expressions."""

    function: FunctionEnum | str
    arguments: tuple[Expression, ...]

    def __init__(self, function: FunctionEnum | str, *arguments: Expression) -> None:
        self.function = function
        self.arguments = tuple(arguments)

    def build(self) -> str:
        args = ", ".join(arg.build() for arg in self.arguments)
        return f"{self.function}({args})"


@dataclass
class AsExpression(Expression):
    """An expression given an alias."""

    alias: str
    origin: Expression

    def build(self) -> str:
        return f'{self.origin.build()} AS "{self.alias}"'


@dataclass(init=False)
class ArithmeticExpression(Expression):
    """Operands joined by an arithmetic operator inside parentheses."""

    operator: ArithmeticOperator | str
    operands: tuple[Expression, ...]

    def __init__(self, operator: ArithmeticOperator | str, *operands: Expression) -> None:
        self.operator = operator
        self.operands = tuple(operands)

    def build(self) -> str:
        joiner = f" {self.operator} "
        return "(" + joiner.join(op.build() for op in self.operands) + ")"