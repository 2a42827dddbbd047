"""Kernel – framework-agnostic building blocks shared by the engine."""

from dataspace_policy.kernel.errors import (
    ApplicationError,
    BaseError,
    PolicyConfigurationError,
    PolicyError,
    PolicyEvaluationError,
    PolicyFailureError,
    RegistryClosedError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "PolicyConfigurationError",
    "PolicyError",
    "PolicyEvaluationError",
    "PolicyFailureError",
    "RegistryClosedError",
]
