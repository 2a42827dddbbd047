"""Testing fakes – recording doubles for evaluation functions."""
from dataspace_policy.testing.fakes.functions import (
    RecordedCall,
    RecordingConstraintFunction,
    RecordingDynamicFunction,
    RecordingRuleFunction,
)

__all__ = [
    "RecordedCall",
    "RecordingConstraintFunction",
    "RecordingDynamicFunction",
    "RecordingRuleFunction",
]
