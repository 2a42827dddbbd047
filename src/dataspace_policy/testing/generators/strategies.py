"""Testing generators – Hypothesis strategies for policy trees.

Requires the ``hypothesis`` package::

    pip install "dataspace-policy[test]"
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from hypothesis.strategies import SearchStrategy  # type: ignore[import-untyped]

    from dataspace_policy.model import Constraint, Policy

DEFAULT_KEYS: tuple[str, ...] = ("spatial", "purpose", "expiry", "membership")
DEFAULT_ACTIONS: tuple[str, ...] = ("use", "transfer", "distribute")
DEFAULT_SCOPE_SEGMENTS: tuple[str, ...] = ("catalog", "contract", "transfer", "request", "negotiation")


def _require_hypothesis() -> Any:
    """Lazy import guard – raises a clear error when hypothesis is absent."""
    try:
        import hypothesis.strategies as st  # type: ignore[import-untyped]
        return st
    except ImportError as exc:
        raise ImportError(
            "Install 'hypothesis' to use the policy strategies: pip install hypothesis"
        ) from exc


def scope_strategy(segments: Sequence[str] = DEFAULT_SCOPE_SEGMENTS, max_depth: int = 3) -> "SearchStrategy[str]":
    """Dot-delimited scope names such as ``"contract.negotiation"``."""
    st = _require_hypothesis()
    return st.lists(st.sampled_from(list(segments)), min_size=1, max_size=max_depth).map(".".join)


def constraint_strategy(keys: Sequence[str] = DEFAULT_KEYS, max_leaves: int = 6) -> "SearchStrategy[Constraint]":
    """Atomic constraints nested in And/Or/Xone combinators."""
    from dataspace_policy.model import (
        AndConstraint,
        AtomicConstraint,
        Operator,
        OrConstraint,
        XoneConstraint,
    )

    st = _require_hypothesis()
    atomic = st.builds(
        AtomicConstraint.of,
        st.sampled_from(list(keys)),
        st.sampled_from(list(Operator)),
        st.one_of(st.text(min_size=1, max_size=8), st.integers(min_value=0, max_value=100)),
    )

    def extend(children: Any) -> Any:
        combinator = st.sampled_from([AndConstraint, OrConstraint, XoneConstraint])
        return st.builds(
            lambda cls, items: cls(tuple(items)),
            combinator,
            st.lists(children, min_size=1, max_size=3),
        )

    return st.recursive(atomic, extend, max_leaves=max_leaves)


def policy_strategy(
    actions: Sequence[str] = DEFAULT_ACTIONS,
    keys: Sequence[str] = DEFAULT_KEYS,
) -> "SearchStrategy[Policy]":
    """Policies with permissions (and nested duties), prohibitions and obligations."""
    from dataspace_policy.model import Action, Duty, Permission, Policy, Prohibition

    st = _require_hypothesis()
    action = st.sampled_from(list(actions)).map(Action)
    constraints = st.lists(constraint_strategy(keys), max_size=3).map(tuple)
    duty = st.builds(Duty, action=action, constraints=constraints)
    permission = st.builds(
        Permission,
        action=action,
        constraints=constraints,
        duties=st.lists(duty, max_size=2).map(tuple),
    )
    prohibition = st.builds(Prohibition, action=action, constraints=constraints)
    return st.builds(
        Policy,
        permissions=st.lists(permission, max_size=3).map(tuple),
        prohibitions=st.lists(prohibition, max_size=2).map(tuple),
        obligations=st.lists(duty, max_size=2).map(tuple),
        uid=st.one_of(st.none(), st.uuids().map(str)),
    )


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_KEYS",
    "DEFAULT_SCOPE_SEGMENTS",
    "constraint_strategy",
    "policy_strategy",
    "scope_strategy",
]
