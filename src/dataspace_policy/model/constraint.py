"""Policy constraints – atomic comparisons and logical combinators.

The constraint tree is immutable and acyclic. ``AndConstraint``,
``OrConstraint`` and ``XoneConstraint`` share :class:`MultiplicityConstraint`
and differ only in the connective applied to their children.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, ClassVar, Iterable

from dataspace_policy.model.expression import Expression, LiteralExpression, as_expression


class Operator(str, Enum):
    """Comparison operators of an atomic constraint."""

    EQ = "EQ"
    NEQ = "NEQ"
    GT = "GT"
    GEQ = "GEQ"
    LT = "LT"
    LEQ = "LEQ"
    IN = "IN"
    HAS_PART = "HAS_PART"
    IS_A = "IS_A"
    IS_ALL_OF = "IS_ALL_OF"
    IS_ANY_OF = "IS_ANY_OF"
    IS_NONE_OF = "IS_NONE_OF"


@dataclasses.dataclass(frozen=True)
class Constraint:
    """Base of all constraints."""


@dataclasses.dataclass(frozen=True)
class AtomicConstraint(Constraint):
    """``left_expression operator right_expression``."""

    left_expression: Expression
    operator: Operator
    right_expression: Expression

    @classmethod
    def of(cls, left: Any, operator: Operator | str, right: Any) -> "AtomicConstraint":
        """Build from raw values, wrapping operands into literal expressions."""
        return cls(as_expression(left), Operator(operator), as_expression(right))

    @property
    def left_value(self) -> Any:
        left = self.left_expression
        return left.value if isinstance(left, LiteralExpression) else left

    @property
    def right_value(self) -> Any:
        right = self.right_expression
        return right.value if isinstance(right, LiteralExpression) else right

    def left_key(self) -> str:
        """Left operand rendered as the string key bindings and functions use."""
        left = self.left_expression
        return left.as_string() if isinstance(left, LiteralExpression) else str(left)

    def __str__(self) -> str:
        return f"{self.left_key()} {self.operator.value} {self.right_expression}"


@dataclasses.dataclass(frozen=True)
class MultiplicityConstraint(Constraint):
    """Ordered set of child constraints combined by a logical connective."""

    constraints: tuple[Constraint, ...] = ()

    connective: ClassVar[str] = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))

    def with_constraints(self, constraints: Iterable[Constraint]) -> "MultiplicityConstraint":
        return dataclasses.replace(self, constraints=tuple(constraints))

    def __str__(self) -> str:
        inner = ", ".join(str(c) for c in self.constraints)
        return f"{self.connective}({inner})"


@dataclasses.dataclass(frozen=True)
class AndConstraint(MultiplicityConstraint):
    """All children must be satisfied."""

    connective: ClassVar[str] = "AND"


@dataclasses.dataclass(frozen=True)
class OrConstraint(MultiplicityConstraint):
    """At least one child must be satisfied."""

    connective: ClassVar[str] = "OR"


@dataclasses.dataclass(frozen=True)
class XoneConstraint(MultiplicityConstraint):
    """Exactly one child must be satisfied."""

    connective: ClassVar[str] = "XONE"


__all__ = [
    "AndConstraint",
    "AtomicConstraint",
    "Constraint",
    "MultiplicityConstraint",
    "Operator",
    "OrConstraint",
    "XoneConstraint",
]
