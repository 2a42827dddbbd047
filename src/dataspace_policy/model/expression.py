"""Policy expressions – operands of atomic constraints."""

from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class Expression:
    """Base for constraint operands."""


@dataclasses.dataclass(frozen=True)
class LiteralExpression(Expression):
    """A literal operand value (string, number, list, ...)."""

    value: Any

    def as_string(self) -> str:
        return self.value if isinstance(self.value, str) else str(self.value)

    def __str__(self) -> str:
        return repr(self.value)


def as_expression(value: Any) -> Expression:
    """Wrap a raw value into a :class:`LiteralExpression` unless already an expression."""
    return value if isinstance(value, Expression) else LiteralExpression(value)


__all__ = ["Expression", "LiteralExpression", "as_expression"]
