"""Function registry – evaluation functions and validators per scope.

Registration happens on a :class:`FunctionRegistryBuilder` during boot. The
builder is consumed by :meth:`FunctionRegistryBuilder.freeze`, which returns
a read-only :class:`FunctionRegistry` shared by every evaluating thread.
Registering after ``freeze`` raises :class:`RegistryClosedError`.

Resolution of a constraint key (:meth:`FunctionRegistry.resolve`):

1. static functions registered for exactly that key whose rule kind covers
   the rule being evaluated;
2. only if step 1 found nothing, dynamic functions whose rule kind covers the
   rule and whose ``can_handle(key)`` is true, each wrapped with the key
   captured so it exposes the static contract.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from dataspace_policy.engine.context import PolicyContext
from dataspace_policy.engine.functions import (
    AtomicConstraintFunction,
    BoundDynamicFunction,
    DynamicAtomicConstraintFunction,
    PolicyValidatorFunction,
    RuleFunction,
    as_constraint_function,
    as_dynamic_function,
    as_rule_function,
    as_rule_kind,
)
from dataspace_policy.engine.scope import visible_scopes
from dataspace_policy.kernel.errors import PolicyConfigurationError, RegistryClosedError
from dataspace_policy.model import Rule, RuleKind
from dataspace_policy.observability.logging import get_logger

_log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class ConstraintFunctionEntry:
    scope: str
    kind: RuleKind
    key: str
    function: AtomicConstraintFunction


@dataclasses.dataclass(frozen=True)
class DynamicFunctionEntry:
    scope: str
    kind: RuleKind
    function: DynamicAtomicConstraintFunction


@dataclasses.dataclass(frozen=True)
class RuleFunctionEntry:
    scope: str
    kind: RuleKind
    function: RuleFunction


@dataclasses.dataclass(frozen=True)
class ValidatorEntry:
    scope: str
    function: PolicyValidatorFunction

    @property
    def name(self) -> str:
        fn = self.function
        return getattr(fn, "__qualname__", None) or type(fn).__qualname__


# ---------------------------------------------------------------------------
# Read-only registry
# ---------------------------------------------------------------------------


class FunctionRegistry:
    """Immutable snapshot of every registered function, keyed by scope."""

    def __init__(
        self,
        *,
        constraint_functions: Mapping[str, tuple[ConstraintFunctionEntry, ...]],
        dynamic_functions: Mapping[str, tuple[DynamicFunctionEntry, ...]],
        rule_functions: Mapping[str, tuple[RuleFunctionEntry, ...]],
        pre_validators: Mapping[str, tuple[ValidatorEntry, ...]],
        post_validators: Mapping[str, tuple[ValidatorEntry, ...]],
        context_types: Mapping[str, type[PolicyContext]],
    ) -> None:
        self._constraint_functions = MappingProxyType(dict(constraint_functions))
        self._dynamic_functions = MappingProxyType(dict(dynamic_functions))
        self._rule_functions = MappingProxyType(dict(rule_functions))
        self._pre_validators = MappingProxyType(dict(pre_validators))
        self._post_validators = MappingProxyType(dict(post_validators))
        self._context_types = MappingProxyType(dict(context_types))

    def scopes(self) -> list[str]:
        """Every scope with at least one constraint function, sorted."""
        return sorted(set(self._constraint_functions) | set(self._dynamic_functions))

    def context_type(self, scope: str) -> type[PolicyContext] | None:
        return self._context_types.get(scope)

    def get_functions(self, scope: str, key: str, kind: RuleKind) -> list[AtomicConstraintFunction]:
        """Functions for *key* registered in exactly *scope*, static before dynamic."""
        return self.resolve((scope,), key, kind)

    def resolve(
        self, scopes: Iterable[str], key: str, kind: RuleKind
    ) -> list[AtomicConstraintFunction]:
        """Functions for *key* across *scopes* (in the given order), static before dynamic."""
        scopes = tuple(scopes)
        static = [fn for scope in scopes for fn in self._static(scope, key, kind)]
        if static:
            return static
        return [
            BoundDynamicFunction(key, entry.function)
            for scope in scopes
            for entry in self._dynamic_functions.get(scope, ())
            if entry.kind.covers(kind) and entry.function.can_handle(key)
        ]

    def resolve_visible(self, scope: str, key: str, kind: RuleKind) -> list[AtomicConstraintFunction]:
        """Functions for *key* visible to *scope* through the scope hierarchy.

        Static functions come from the most specific scope that has any for
        *key*, so a child scope overrides its ancestors and ``*``. Dynamic
        functions from every visible scope are used only when no scope has a
        static one.
        """
        scopes = visible_scopes(scope)
        for candidate in scopes:
            static = self._static(candidate, key, kind)
            if static:
                return static
        return self.resolve(scopes, key, kind)

    def _static(self, scope: str, key: str, kind: RuleKind) -> list[AtomicConstraintFunction]:
        return [
            entry.function
            for entry in self._constraint_functions.get(scope, ())
            if entry.key == key and entry.kind.covers(kind)
        ]

    def rule_functions(self, scope: str, kind: RuleKind) -> list[RuleFunction]:
        return [
            entry.function
            for candidate in visible_scopes(scope)
            for entry in self._rule_functions.get(candidate, ())
            if entry.kind.covers(kind)
        ]

    def pre_validators(self, scope: str) -> list[ValidatorEntry]:
        return _visible(self._pre_validators, scope)

    def post_validators(self, scope: str) -> list[ValidatorEntry]:
        return _visible(self._post_validators, scope)


def _visible(entries: Mapping[str, tuple[ValidatorEntry, ...]], scope: str) -> list[ValidatorEntry]:
    return [entry for candidate in visible_scopes(scope) for entry in entries.get(candidate, ())]


# ---------------------------------------------------------------------------
# Boot-time builder
# ---------------------------------------------------------------------------


class FunctionRegistryBuilder:
    """Single-writer registration surface used while the runtime boots.

    Not thread-safe: registration calls must be serialised, typically on the
    startup thread, and must complete before :meth:`freeze`.
    """

    def __init__(self) -> None:
        self._constraint_functions: dict[str, list[ConstraintFunctionEntry]] = {}
        self._dynamic_functions: dict[str, list[DynamicFunctionEntry]] = {}
        self._rule_functions: dict[str, list[RuleFunctionEntry]] = {}
        self._pre_validators: dict[str, list[ValidatorEntry]] = {}
        self._post_validators: dict[str, list[ValidatorEntry]] = {}
        self._context_types: dict[str, type[PolicyContext]] = {}
        self._closed = False

    def register_scope(self, scope: str, context_type: type[PolicyContext]) -> None:
        """Declare the :class:`PolicyContext` subclass evaluations in *scope* must use."""
        self._check_open("register scope")
        if not (isinstance(context_type, type) and issubclass(context_type, PolicyContext)):
            raise PolicyConfigurationError(
                f"Context type for scope '{scope}' must subclass PolicyContext",
                detail={"scope": scope},
            )
        self._context_types[scope] = context_type
        _log.debug("policy.scope.registered", scope=scope, context_type=context_type.__name__)

    def register_function(
        self,
        scope: str,
        rule_type: RuleKind | type[Rule],
        key_or_function: Any,
        function: Any = None,
        *,
        can_handle: Callable[[str], bool] | None = None,
    ) -> None:
        """Register a constraint, dynamic or rule function.

        * ``register_function(scope, Permission, "spatial", fn)`` – static,
          bound to the exact left-operand key.
        * ``register_function(scope, Permission, dynamic_fn)`` – dynamic, when
          the function has ``can_handle`` or *can_handle* is passed.
        * ``register_function(scope, Permission, rule_fn)`` – whole-rule.
        """
        self._check_open("register function")
        kind = as_rule_kind(rule_type)
        if function is not None:
            key = str(key_or_function)
            entry = ConstraintFunctionEntry(scope, kind, key, as_constraint_function(function))
            self._constraint_functions.setdefault(scope, []).append(entry)
            _log.debug("policy.function.registered", scope=scope, kind=kind.value, key=key)
        elif can_handle is not None or hasattr(key_or_function, "can_handle"):
            dynamic = as_dynamic_function(key_or_function, can_handle)
            self._dynamic_functions.setdefault(scope, []).append(DynamicFunctionEntry(scope, kind, dynamic))
            _log.debug("policy.dynamic_function.registered", scope=scope, kind=kind.value)
        else:
            rule_fn = as_rule_function(key_or_function)
            self._rule_functions.setdefault(scope, []).append(RuleFunctionEntry(scope, kind, rule_fn))
            _log.debug("policy.rule_function.registered", scope=scope, kind=kind.value)

    def register_pre_validator(self, scope: str, validator: PolicyValidatorFunction) -> None:
        self._check_open("register pre-validator")
        self._pre_validators.setdefault(scope, []).append(ValidatorEntry(scope, validator))

    def register_post_validator(self, scope: str, validator: PolicyValidatorFunction) -> None:
        self._check_open("register post-validator")
        self._post_validators.setdefault(scope, []).append(ValidatorEntry(scope, validator))

    def freeze(self) -> FunctionRegistry:
        """Close the builder and publish the read-only registry."""
        self._check_open("freeze registry")
        self._closed = True
        return FunctionRegistry(
            constraint_functions={k: tuple(v) for k, v in self._constraint_functions.items()},
            dynamic_functions={k: tuple(v) for k, v in self._dynamic_functions.items()},
            rule_functions={k: tuple(v) for k, v in self._rule_functions.items()},
            pre_validators={k: tuple(v) for k, v in self._pre_validators.items()},
            post_validators={k: tuple(v) for k, v in self._post_validators.items()},
            context_types=self._context_types,
        )

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise RegistryClosedError(operation)


__all__ = [
    "ConstraintFunctionEntry",
    "DynamicFunctionEntry",
    "FunctionRegistry",
    "FunctionRegistryBuilder",
    "RuleFunctionEntry",
    "ValidatorEntry",
]
