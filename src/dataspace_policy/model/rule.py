"""Policy rules – Permission, Prohibition and Duty.

Every rule carries an optional :class:`Action` and a tuple of constraints.
A :class:`Permission` additionally owns the duties attached to it; those
duties are re-bound on construction so that ``duty.parent_permission`` points
back to the enclosing permission. The back-reference is a lookup aid only and
takes no part in equality, hashing or ``repr``.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import ClassVar, Iterable

from dataspace_policy.model.constraint import Constraint


class RuleKind(str, Enum):
    """Variant tag of a rule. ``RULE`` stands for "any rule"."""

    RULE = "rule"
    PERMISSION = "permission"
    PROHIBITION = "prohibition"
    DUTY = "duty"

    def covers(self, other: "RuleKind") -> bool:
        """Return ``True`` when a function registered for ``self`` applies to *other*."""
        return self is RuleKind.RULE or self is other


@dataclasses.dataclass(frozen=True)
class Action:
    """The action a rule governs, e.g. ``"use"``."""

    type: str
    include_in: str | None = None
    constraint: Constraint | None = None

    def __str__(self) -> str:
        return self.type


@dataclasses.dataclass(frozen=True)
class Rule:
    """Base of Permission, Prohibition and Duty."""

    action: Action | None = None
    constraints: tuple[Constraint, ...] = ()
    uid: str | None = None
    assigner: str | None = None
    assignee: str | None = None
    target: str | None = None

    kind: ClassVar[RuleKind] = RuleKind.RULE

    def __post_init__(self) -> None:
        if isinstance(self.action, str):
            object.__setattr__(self, "action", Action(self.action))
        object.__setattr__(self, "constraints", tuple(self.constraints))

    @property
    def action_type(self) -> str | None:
        return self.action.type if self.action is not None else None

    def with_constraints(self, constraints: Iterable[Constraint]) -> "Rule":
        return dataclasses.replace(self, constraints=tuple(constraints))

    def __str__(self) -> str:
        inner = ", ".join(str(c) for c in self.constraints)
        return f"{type(self).__name__}(action={self.action_type}, constraints=[{inner}])"


@dataclasses.dataclass(frozen=True)
class Duty(Rule):
    """An obligation, either standalone or attached to a permission."""

    consequence: "Duty | None" = None
    parent_permission: "Permission | None" = dataclasses.field(
        default=None, compare=False, repr=False
    )

    kind: ClassVar[RuleKind] = RuleKind.DUTY


@dataclasses.dataclass(frozen=True)
class Permission(Rule):
    """Grants the action when all constraints hold and duties are fulfilled."""

    duties: tuple[Duty, ...] = ()

    kind: ClassVar[RuleKind] = RuleKind.PERMISSION

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self,
            "duties",
            tuple(dataclasses.replace(d, parent_permission=self) for d in self.duties),
        )

    def with_duties(self, duties: Iterable[Duty]) -> "Permission":
        return dataclasses.replace(self, duties=tuple(duties))


@dataclasses.dataclass(frozen=True)
class Prohibition(Rule):
    """Forbids the action when its constraints hold."""

    kind: ClassVar[RuleKind] = RuleKind.PROHIBITION


__all__ = ["Action", "Duty", "Permission", "Prohibition", "Rule", "RuleKind"]
