"""Testing support – fakes, fixtures and property-based generators.

Import in your ``conftest.py``::

    pytest_plugins = ["dataspace_policy.testing.fixtures"]
"""

from dataspace_policy.testing.fakes import (
    RecordedCall,
    RecordingConstraintFunction,
    RecordingDynamicFunction,
    RecordingRuleFunction,
)
from dataspace_policy.testing.generators import (
    constraint_strategy,
    policy_strategy,
    scope_strategy,
)

__all__ = [
    "RecordedCall",
    "RecordingConstraintFunction",
    "RecordingDynamicFunction",
    "RecordingRuleFunction",
    "constraint_strategy",
    "policy_strategy",
    "scope_strategy",
]
