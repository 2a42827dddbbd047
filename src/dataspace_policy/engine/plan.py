"""Evaluation plans – a dry run of ``evaluate`` for one scope.

A plan lists the validators, rule functions and constraint functions that
would run, and marks every rule or constraint that scope filtering would
drop together with the reason. Nothing is evaluated while planning.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from dataspace_policy.engine.functions import BoundDynamicFunction
from dataspace_policy.engine.registry import FunctionRegistry, ValidatorEntry
from dataspace_policy.engine.validator import RuleValidator
from dataspace_policy.model import (
    AtomicConstraint,
    Constraint,
    Duty,
    MultiplicityConstraint,
    Permission,
    Policy,
    Prohibition,
    Rule,
)


@dataclasses.dataclass(frozen=True)
class ValidatorStep:
    name: str


@dataclasses.dataclass(frozen=True)
class RuleFunctionStep:
    name: str
    rule: Rule


@dataclasses.dataclass(frozen=True)
class AtomicConstraintStep:
    constraint: AtomicConstraint
    rule: Rule
    functions: tuple[str, ...] = ()
    filtering_reasons: tuple[str, ...] = ()

    @property
    def is_filtered(self) -> bool:
        return bool(self.filtering_reasons)


@dataclasses.dataclass(frozen=True)
class MultiplicityConstraintStep:
    constraint: MultiplicityConstraint
    steps: tuple["ConstraintStep", ...] = ()

    @property
    def connective(self) -> str:
        return self.constraint.connective


ConstraintStep = AtomicConstraintStep | MultiplicityConstraintStep


@dataclasses.dataclass(frozen=True)
class RuleStep:
    rule: Rule
    filtered: bool = False
    filtering_reasons: tuple[str, ...] = ()
    rule_functions: tuple[RuleFunctionStep, ...] = ()
    constraint_steps: tuple[ConstraintStep, ...] = ()
    duty_steps: tuple["RuleStep", ...] = ()


@dataclasses.dataclass(frozen=True)
class PolicyEvaluationPlan:
    scope: str
    pre_validators: tuple[ValidatorStep, ...] = ()
    permission_steps: tuple[RuleStep, ...] = ()
    prohibition_steps: tuple[RuleStep, ...] = ()
    obligation_steps: tuple[RuleStep, ...] = ()
    post_validators: tuple[ValidatorStep, ...] = ()


class PolicyEvaluationPlanner:
    """Builds a :class:`PolicyEvaluationPlan` for one scope."""

    def __init__(self, rule_validator: RuleValidator, functions: FunctionRegistry, scope: str) -> None:
        self._rule_validator = rule_validator
        self._functions = functions
        self._scope = scope

    def plan(self, policy: Policy) -> PolicyEvaluationPlan:
        return PolicyEvaluationPlan(
            scope=self._scope,
            pre_validators=_validator_steps(self._functions.pre_validators(self._scope)),
            permission_steps=tuple(self._plan_permission(p) for p in policy.permissions),
            prohibition_steps=tuple(self._plan_rule(p) for p in policy.prohibitions),
            obligation_steps=tuple(self._plan_rule(d) for d in policy.obligations),
            post_validators=_validator_steps(self._functions.post_validators(self._scope)),
        )

    def _plan_permission(self, permission: Permission) -> RuleStep:
        step = self._plan_rule(permission)
        return dataclasses.replace(step, duty_steps=tuple(self._plan_rule(d) for d in permission.duties))

    def _plan_rule(self, rule: Permission | Prohibition | Duty) -> RuleStep:
        reasons: list[str] = []
        action_type = rule.action_type
        if action_type is not None and not self._rule_validator.is_in_scope(action_type, self._scope):
            reasons.append(f"action '{action_type}' is not bound to scope '{self._scope}'")
        return RuleStep(
            rule=rule,
            filtered=bool(reasons),
            filtering_reasons=tuple(reasons),
            rule_functions=tuple(
                RuleFunctionStep(_describe(fn), rule)
                for fn in self._functions.rule_functions(self._scope, rule.kind)
            ),
            constraint_steps=tuple(self._plan_constraint(c, rule) for c in rule.constraints),
        )

    def _plan_constraint(self, constraint: Constraint, rule: Rule) -> ConstraintStep:
        match constraint:
            case AtomicConstraint():
                return self._plan_atomic(constraint, rule)
            case MultiplicityConstraint():
                return MultiplicityConstraintStep(
                    constraint, tuple(self._plan_constraint(c, rule) for c in constraint.constraints)
                )
            case _:
                raise TypeError(f"Unsupported constraint type: {type(constraint).__name__}")

    def _plan_atomic(self, constraint: AtomicConstraint, rule: Rule) -> AtomicConstraintStep:
        key = constraint.left_key()
        functions = self._functions.resolve_visible(self._scope, key, rule.kind)
        reasons: list[str] = []
        if not self._rule_validator.is_in_scope(key, self._scope):
            reasons.append(f"leftOperand '{key}' is not bound to scope '{self._scope}'")
        if not functions:
            reasons.append(f"leftOperand '{key}' is not bound to any function within scope '{self._scope}'")
        return AtomicConstraintStep(
            constraint=constraint,
            rule=rule,
            functions=tuple(_describe(fn) for fn in functions),
            filtering_reasons=tuple(reasons),
        )


def _validator_steps(entries: list[ValidatorEntry]) -> tuple[ValidatorStep, ...]:
    return tuple(ValidatorStep(entry.name) for entry in entries)


def _describe(function: Any) -> str:
    if isinstance(function, BoundDynamicFunction):
        return f"{_describe(function.function)}[{function.key}]"
    target = getattr(function, "fn", function)
    return getattr(target, "__qualname__", None) or type(target).__qualname__


__all__ = [
    "AtomicConstraintStep",
    "ConstraintStep",
    "MultiplicityConstraintStep",
    "PolicyEvaluationPlan",
    "PolicyEvaluationPlanner",
    "RuleFunctionStep",
    "RuleStep",
    "ValidatorStep",
]
