"""Evaluation function contracts and adapters.

Feature modules contribute three kinds of functions:

* **Atomic constraint functions** bound to an exact left-operand key.
* **Dynamic constraint functions** selected at runtime by ``can_handle(key)``.
* **Rule functions** evaluated once per rule, independent of constraints.

Plain callables are accepted everywhere and adapted to the object contracts
below, so both styles register the same way::

    builder.register_function("catalog", Permission, "spatial",
                              lambda op, right, rule, ctx: right == ctx.get_data("region"))
"""

from __future__ import annotations

import abc
import dataclasses
from typing import Any, Callable, Protocol, runtime_checkable

from dataspace_policy.engine.context import PolicyContext
from dataspace_policy.kernel.types import Result, success
from dataspace_policy.model import Operator, Rule, RuleKind


@runtime_checkable
class AtomicConstraintFunction(Protocol):
    """Evaluates constraints whose left operand equals the registered key."""

    def evaluate(
        self, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool: ...

    def validate(self, operator: Operator, right_value: Any, rule: Rule) -> Result[None]: ...


@runtime_checkable
class DynamicAtomicConstraintFunction(Protocol):
    """Evaluates constraints for every key it declares it can handle."""

    def can_handle(self, key: str) -> bool: ...

    def evaluate(
        self, key: str, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool: ...

    def validate(
        self, key: str, operator: Operator, right_value: Any, rule: Rule
    ) -> Result[None]: ...


@runtime_checkable
class RuleFunction(Protocol):
    """Evaluates a whole rule."""

    def evaluate(self, rule: Rule, context: PolicyContext) -> bool: ...


PolicyValidatorFunction = Callable[[Any, PolicyContext], bool]


# ---------------------------------------------------------------------------
# Convenience bases with a permissive ``validate``
# ---------------------------------------------------------------------------


class ConstraintFunction(abc.ABC):
    """Base for static constraint functions; ``validate`` accepts by default."""

    @abc.abstractmethod
    def evaluate(
        self, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool: ...

    def validate(self, operator: Operator, right_value: Any, rule: Rule) -> Result[None]:  # noqa: ARG002
        return success()


class DynamicConstraintFunction(abc.ABC):
    """Base for dynamic constraint functions; ``validate`` accepts by default."""

    @abc.abstractmethod
    def can_handle(self, key: str) -> bool: ...

    @abc.abstractmethod
    def evaluate(
        self, key: str, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool: ...

    def validate(self, key: str, operator: Operator, right_value: Any, rule: Rule) -> Result[None]:  # noqa: ARG002
        return success()


# ---------------------------------------------------------------------------
# Callable adapters
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class CallableConstraintFunction(ConstraintFunction):
    """Adapts ``fn(operator, right_value, rule, context) -> bool``."""

    fn: Callable[[Operator, Any, Rule, PolicyContext], bool]

    def evaluate(
        self, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool:
        return self.fn(operator, right_value, rule, context)


@dataclasses.dataclass(frozen=True)
class CallableDynamicFunction(DynamicConstraintFunction):
    """Adapts ``fn(key, operator, right_value, rule, context) -> bool`` plus a predicate."""

    fn: Callable[[str, Operator, Any, Rule, PolicyContext], bool]
    predicate: Callable[[str], bool]

    def can_handle(self, key: str) -> bool:
        return self.predicate(key)

    def evaluate(
        self, key: str, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool:
        return self.fn(key, operator, right_value, rule, context)


@dataclasses.dataclass(frozen=True)
class CallableRuleFunction:
    """Adapts ``fn(rule, context) -> bool``."""

    fn: Callable[[Rule, PolicyContext], bool]

    def evaluate(self, rule: Rule, context: PolicyContext) -> bool:
        return self.fn(rule, context)


@dataclasses.dataclass(frozen=True)
class BoundDynamicFunction:
    """A dynamic function with its key captured, exposing the static contract."""

    key: str
    function: DynamicAtomicConstraintFunction

    def evaluate(
        self, operator: Operator, right_value: Any, rule: Rule, context: PolicyContext
    ) -> bool:
        return self.function.evaluate(self.key, operator, right_value, rule, context)

    def validate(self, operator: Operator, right_value: Any, rule: Rule) -> Result[None]:
        return self.function.validate(self.key, operator, right_value, rule)


def as_constraint_function(function: Any) -> AtomicConstraintFunction:
    if hasattr(function, "evaluate") and hasattr(function, "validate"):
        return function
    if callable(function):
        return CallableConstraintFunction(function)
    raise TypeError(f"Not a constraint function: {function!r}")


def as_dynamic_function(
    function: Any, can_handle: Callable[[str], bool] | None = None
) -> DynamicAtomicConstraintFunction:
    if can_handle is None and hasattr(function, "can_handle"):
        return function
    if callable(function) and can_handle is not None:
        return CallableDynamicFunction(function, can_handle)
    raise TypeError(f"Not a dynamic constraint function: {function!r}")


def as_rule_function(function: Any) -> RuleFunction:
    if hasattr(function, "evaluate"):
        return function
    if callable(function):
        return CallableRuleFunction(function)
    raise TypeError(f"Not a rule function: {function!r}")


def as_rule_kind(rule_type: RuleKind | type[Rule]) -> RuleKind:
    """Accept either a :class:`RuleKind` tag or a rule class such as ``Permission``."""
    if isinstance(rule_type, RuleKind):
        return rule_type
    if isinstance(rule_type, type) and issubclass(rule_type, Rule):
        return rule_type.kind
    raise TypeError(f"Not a rule kind: {rule_type!r}")


__all__ = [
    "AtomicConstraintFunction",
    "BoundDynamicFunction",
    "CallableConstraintFunction",
    "CallableDynamicFunction",
    "CallableRuleFunction",
    "ConstraintFunction",
    "DynamicAtomicConstraintFunction",
    "DynamicConstraintFunction",
    "PolicyValidatorFunction",
    "RuleFunction",
    "as_constraint_function",
    "as_dynamic_function",
    "as_rule_function",
    "as_rule_kind",
]
