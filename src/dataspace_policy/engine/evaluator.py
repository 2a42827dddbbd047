"""Policy evaluator – runs registered functions over a (filtered) policy.

Evaluation never short-circuits: every rule and every constraint is visited
so that the caller receives all violations in one pass. Problems are
recorded on the :class:`PolicyContext`; the return value only says whether
the policy as a whole was satisfied.

Semantics:

* ``AndConstraint`` is satisfied when all children are.
* ``OrConstraint`` is satisfied when at least one child is.
* ``XoneConstraint`` is satisfied when exactly one child is.
* A permission or duty is violated when one of its constraints is not
  satisfied; a prohibition is violated when one of its constraints *is*.
* An atomic constraint with several resolved functions is satisfied only if
  all of them return ``True``.
"""

from __future__ import annotations

from dataspace_policy.engine.context import PolicyContext
from dataspace_policy.engine.registry import FunctionRegistry
from dataspace_policy.kernel.errors import PolicyEvaluationError
from dataspace_policy.model import (
    AndConstraint,
    AtomicConstraint,
    Constraint,
    OrConstraint,
    Permission,
    Policy,
    Rule,
    RuleKind,
    XoneConstraint,
)
from dataspace_policy.observability.logging import get_logger

_log = get_logger(__name__)


class PolicyEvaluator:
    """Evaluates one policy for one scope, reporting problems into *context*."""

    def __init__(self, functions: FunctionRegistry, scope: str, context: PolicyContext) -> None:
        self._functions = functions
        self._scope = scope
        self._context = context

    def evaluate(self, policy: Policy) -> bool:
        results = [self._evaluate_permission(p) for p in policy.permissions]
        results += [self._evaluate_rule(p) for p in policy.prohibitions]
        results += [self._evaluate_rule(d) for d in policy.obligations]
        return all(results)

    def _evaluate_permission(self, permission: Permission) -> bool:
        duties = [self._evaluate_rule(duty) for duty in permission.duties]
        return self._evaluate_rule(permission) and all(duties)

    def _evaluate_rule(self, rule: Rule) -> bool:
        prohibition = rule.kind is RuleKind.PROHIBITION
        satisfied = self._apply_rule_functions(rule, prohibition)

        for constraint in rule.constraints:
            result = self._evaluate_constraint(constraint, rule)
            if result == prohibition:
                message = "Prohibited constraint evaluated true" if prohibition else "Constraint evaluated false"
                self._context.report_problem(f"{message} => {constraint} in {rule}")
                satisfied = False
        return satisfied

    def _apply_rule_functions(self, rule: Rule, prohibition: bool) -> bool:
        satisfied = True
        for function in self._functions.rule_functions(self._scope, rule.kind):
            try:
                # a prohibition rule function returning True means the prohibition applies
                violated = function.evaluate(rule, self._context) == prohibition
            except PolicyEvaluationError as exc:
                _log.warning("policy.function.failed", scope=self._scope, rule=str(rule), error=exc.message)
                self._context.report_problem(f"Evaluation error for {rule}: {exc.message}")
                satisfied = False
                continue
            if violated:
                self._context.report_problem(f"Evaluation failed for: {rule}")
                satisfied = False
        return satisfied

    def _evaluate_constraint(self, constraint: Constraint, rule: Rule) -> bool:
        match constraint:
            case AtomicConstraint():
                return self._evaluate_atomic(constraint, rule)
            case AndConstraint():
                return all([self._evaluate_constraint(c, rule) for c in constraint.constraints])
            case OrConstraint():
                return any([self._evaluate_constraint(c, rule) for c in constraint.constraints])
            case XoneConstraint():
                return [self._evaluate_constraint(c, rule) for c in constraint.constraints].count(True) == 1
            case _:
                raise TypeError(f"Unsupported constraint type: {type(constraint).__name__}")

    def _evaluate_atomic(self, constraint: AtomicConstraint, rule: Rule) -> bool:
        key = constraint.left_value
        if not isinstance(key, str):
            self._context.report_problem(f"Left operand value is not a String: {constraint} in {rule}")
            return False

        functions = self._functions.resolve_visible(self._scope, key, rule.kind)
        if not functions:
            self._context.report_problem(f"No evaluation function found for '{key}' in {rule}")
            return False

        results = []
        for function in functions:
            try:
                results.append(
                    bool(function.evaluate(constraint.operator, constraint.right_value, rule, self._context))
                )
            except PolicyEvaluationError as exc:
                _log.warning("policy.function.failed", scope=self._scope, key=key, error=exc.message)
                self._context.report_problem(f"Evaluation error for '{key}': {exc.message}")
                results.append(False)
        return all(results)


__all__ = ["PolicyEvaluator"]
