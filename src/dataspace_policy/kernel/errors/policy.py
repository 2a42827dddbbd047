"""Policy errors – engine misconfiguration and evaluation failures.

Only genuine misconfiguration is raised by the engine itself. A policy that
is invalid or unsatisfied is reported as an ``Err`` result, never raised.
"""

from __future__ import annotations

from typing import Any, Sequence

from dataspace_policy.kernel.errors.base import BaseError


class PolicyError(BaseError):
    """Root of all policy-engine errors."""

    default_code = "policy_error"


class PolicyConfigurationError(PolicyError):
    """A required collaborator is missing or the engine is wired incorrectly."""

    default_code = "policy_configuration_error"


class RegistryClosedError(PolicyConfigurationError):
    """Registration was attempted after the registry was built."""

    default_code = "registry_closed"

    def __init__(self, operation: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot {operation}: the function registry has already been built",
            **kwargs,
        )
        self.operation = operation


class PolicyEvaluationError(PolicyError):
    """Raised by an evaluation function to report an expected failure.

    The engine records the message as a problem on the ``PolicyContext`` and
    treats the constraint as unsatisfied. Any other exception raised by an
    evaluation function propagates to the caller.
    """

    default_code = "policy_evaluation_error"


class PolicyFailureError(PolicyError):
    """Raised when unwrapping a failed ``Result``.

    ``messages`` holds every collected problem, in order.
    """

    default_code = "policy_failure"

    def __init__(self, messages: Sequence[str], **kwargs: Any) -> None:
        self.messages: list[str] = list(messages)
        super().__init__(", ".join(self.messages) or "policy failure", **kwargs)

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["messages"] = self.messages
        return base


__all__ = [
    "PolicyConfigurationError",
    "PolicyError",
    "PolicyEvaluationError",
    "PolicyFailureError",
    "RegistryClosedError",
]
