"""Structural policy validation.

The validator does not evaluate anything. It checks that every action and
every atomic-constraint left operand is bound to some scope and that every
left operand resolves to at least one evaluation function, then runs each
resolved function's ``validate``. Every problem is collected; a single
atomic constraint may report several.
"""

from __future__ import annotations

from typing import Sequence

from dataspace_policy.engine.binding import RuleBindingRegistry
from dataspace_policy.engine.registry import FunctionRegistry
from dataspace_policy.kernel.errors import PolicyConfigurationError, PolicyEvaluationError
from dataspace_policy.kernel.types import Result, failure, merge_all, success
from dataspace_policy.model import (
    AtomicConstraint,
    Constraint,
    MultiplicityConstraint,
    Permission,
    Policy,
    Rule,
)


class RuleValidator:
    """Read-only view of the binding registry used by validation and planning."""

    def __init__(self, registry: RuleBindingRegistry) -> None:
        self._registry = registry

    def is_bounded(self, rule_type: str) -> bool:
        """``True`` if *rule_type* is bound to at least one scope."""
        return bool(self._registry.bindings(rule_type))

    def is_in_scope(self, rule_type: str, scope: str) -> bool:
        return self._registry.is_in_scope(rule_type, scope)


class PolicyValidator:
    """Depth-first structural validator.

    The enclosing rules are threaded through the recursion as an explicit
    tuple, so nothing needs to be cleaned up when a function raises.

    Args:
        rule_validator: Binding oracle. Required.
        functions: Registry the left operands are resolved against.
        scopes: Scopes searched for functions; defaults to every scope that
            has functions registered.
    """

    def __init__(
        self,
        rule_validator: RuleValidator | None,
        functions: FunctionRegistry,
        scopes: Sequence[str] | None = None,
    ) -> None:
        if rule_validator is None:
            raise PolicyConfigurationError("PolicyValidator requires a RuleValidator")
        self._rule_validator = rule_validator
        self._functions = functions
        self._scopes = tuple(scopes) if scopes else tuple(functions.scopes())

    def validate(self, policy: Policy) -> Result[None]:
        return merge_all(
            [
                *(self._validate_permission(p) for p in policy.permissions),
                *(self._validate_rule(p, ()) for p in policy.prohibitions),
                *(self._validate_rule(d, ()) for d in policy.obligations),
            ]
        )

    def _validate_permission(self, permission: Permission) -> Result[None]:
        duties = [self._validate_rule(duty, (permission,)) for duty in permission.duties]
        return merge_all([*duties, self._validate_rule(permission, ())])

    def _validate_rule(self, rule: Rule, enclosing: tuple[Rule, ...]) -> Result[None]:
        stack = (*enclosing, rule)
        result: Result[None] = success()
        action_type = rule.action_type
        if action_type is not None and not self._rule_validator.is_bounded(action_type):
            result = failure(f"action '{action_type}' is not bound to any scopes. Rule: {rule}")
        return result.merge(merge_all([self._validate_constraint(c, stack) for c in rule.constraints]))

    def _validate_constraint(self, constraint: Constraint, stack: tuple[Rule, ...]) -> Result[None]:
        match constraint:
            case AtomicConstraint():
                return self._validate_atomic(constraint, stack)
            case MultiplicityConstraint():
                return merge_all([self._validate_constraint(c, stack) for c in constraint.constraints])
            case _:
                return failure(f"Unsupported constraint type: {type(constraint).__name__}")

    def _validate_atomic(self, constraint: AtomicConstraint, stack: tuple[Rule, ...]) -> Result[None]:
        rule = stack[-1]
        key = constraint.left_key()
        results: list[Result[None]] = []

        if not self._rule_validator.is_bounded(key):
            results.append(failure(f"leftOperand '{key}' is not bound to any scopes. Rule: {rule}"))

        functions = self._functions.resolve(self._scopes, key, rule.kind)
        if not functions:
            results.append(failure(f"leftOperand '{key}' is not bound to any functions. Rule: {rule}"))

        for function in functions:
            try:
                results.append(function.validate(constraint.operator, constraint.right_value, rule))
            except PolicyEvaluationError as exc:
                results.append(failure(f"leftOperand '{key}' failed validation: {exc.message}. Rule: {rule}"))
        return merge_all(results)


__all__ = ["PolicyValidator", "RuleValidator"]
