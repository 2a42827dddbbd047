"""Testing generators – property-based strategies for policies."""
from dataspace_policy.testing.generators.strategies import (
    constraint_strategy,
    policy_strategy,
    scope_strategy,
)

__all__ = ["constraint_strategy", "policy_strategy", "scope_strategy"]
