"""Scope filter – prunes a policy to what is visible in one scope."""

from __future__ import annotations

import dataclasses
from typing import TypeVar

from dataspace_policy.engine.binding import RuleBindingRegistry
from dataspace_policy.model import (
    AtomicConstraint,
    Constraint,
    Duty,
    MultiplicityConstraint,
    Permission,
    Policy,
    Rule,
)


R = TypeVar("R", bound=Rule)


class ScopeFilter:
    """Returns structural copies of policies containing only in-scope elements.

    A rule is dropped when its action type is not in scope. An atomic
    constraint is dropped when its left operand is not in scope. A
    multiplicity constraint keeps only its in-scope children and is dropped
    when none remain. Inputs are never mutated.
    """

    def __init__(self, registry: RuleBindingRegistry) -> None:
        self._registry = registry

    def apply_scope(self, policy: Policy, scope: str) -> Policy:
        permissions = [p for p in (self.apply_to_permission(p, scope) for p in policy.permissions) if p is not None]
        prohibitions = [p for p in (self.apply_to_rule(p, scope) for p in policy.prohibitions) if p is not None]
        obligations = [d for d in (self.apply_to_duty(d, scope) for d in policy.obligations) if d is not None]
        return policy.with_rules(
            permissions=permissions,
            prohibitions=prohibitions,
            obligations=obligations,
        )

    def apply_to_permission(self, permission: Permission, scope: str) -> Permission | None:
        if not self._action_in_scope(permission, scope):
            return None
        duties = [d for d in (self.apply_to_duty(d, scope) for d in permission.duties) if d is not None]
        filtered = permission.with_duties(duties)
        return filtered.with_constraints(self._filter_constraints(permission.constraints, scope))

    def apply_to_duty(self, duty: Duty, scope: str) -> Duty | None:
        filtered = self.apply_to_rule(duty, scope)
        if filtered is None or duty.consequence is None:
            return filtered
        return dataclasses.replace(filtered, consequence=self.apply_to_duty(duty.consequence, scope))

    def apply_to_rule(self, rule: R, scope: str) -> R | None:
        if not self._action_in_scope(rule, scope):
            return None
        return rule.with_constraints(self._filter_constraints(rule.constraints, scope))

    def apply_to_constraint(self, constraint: Constraint, scope: str) -> Constraint | None:
        match constraint:
            case AtomicConstraint():
                return constraint if self._registry.is_in_scope(constraint.left_key(), scope) else None
            case MultiplicityConstraint():
                children = self._filter_constraints(constraint.constraints, scope)
                return constraint.with_constraints(children) if children else None
            case _:
                return constraint

    def _filter_constraints(self, constraints: tuple[Constraint, ...], scope: str) -> list[Constraint]:
        return [c for c in (self.apply_to_constraint(c, scope) for c in constraints) if c is not None]

    def _action_in_scope(self, rule: Rule, scope: str) -> bool:
        action_type = rule.action_type
        return action_type is None or self._registry.is_in_scope(action_type, scope)


__all__ = ["ScopeFilter"]
