"""Rule binding registry – which scopes a rule type is visible in.

A rule type is either an action type (``"use"``) or the left operand of an
atomic constraint (``"spatial"``). Extensions bind rule types to scopes at
boot; the engine consults the registry on every ``filter``/``evaluate``.

Writes are serialised by a lock and publish a fresh immutable snapshot, so
concurrent readers never observe a partially-registered binding.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from dataspace_policy.engine.scope import is_visible
from dataspace_policy.observability.logging import get_logger

DynamicBinder = Callable[[str], Iterable[str]]

_log = get_logger(__name__)


class RuleBindingRegistry:
    """Maps rule types to the scopes they are bound to."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bindings: Mapping[str, frozenset[str]] = MappingProxyType({})
        self._dynamic_binders: tuple[DynamicBinder, ...] = ()

    def bind(self, rule_type: str, scope: str) -> None:
        """Bind *rule_type* to *scope*. Binding the same pair twice is a no-op."""
        with self._lock:
            current = self._bindings.get(rule_type, frozenset())
            if scope in current:
                return
            updated = dict(self._bindings)
            updated[rule_type] = current | {scope}
            self._bindings = MappingProxyType(updated)
        _log.debug("policy.binding.registered", rule_type=rule_type, scope=scope)

    def dynamic_bind(self, binder: DynamicBinder) -> None:
        """Install a fallback resolver consulted for rule types with no static binding."""
        with self._lock:
            self._dynamic_binders = (*self._dynamic_binders, binder)
        _log.debug("policy.binding.dynamic_registered", binders=len(self._dynamic_binders))

    def bindings(self, rule_type: str) -> frozenset[str]:
        """Exact-match scopes for *rule_type*: no hierarchy, no dynamic fallback."""
        return self._bindings.get(rule_type, frozenset())

    def is_in_scope(self, rule_type: str, scope: str) -> bool:
        """Return ``True`` if *rule_type* is visible in *scope* or one of its ancestors."""
        bound = self._bindings.get(rule_type)
        if bound:
            return _matches(bound, scope)
        for binder in self._dynamic_binders:
            if _matches(frozenset(binder(rule_type)), scope):
                return True
        return False


def _matches(bound: frozenset[str], scope: str) -> bool:
    return any(is_visible(registered, scope) for registered in bound)


__all__ = ["DynamicBinder", "RuleBindingRegistry"]
