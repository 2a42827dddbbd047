"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError             (application.py)
    │   └── ConfigError              (dataspace_policy.config.validation)
    └── PolicyError                  (policy.py)
        ├── PolicyConfigurationError
        │   └── RegistryClosedError
        ├── PolicyEvaluationError
        └── PolicyFailureError
"""

from dataspace_policy.kernel.errors.application import ApplicationError
from dataspace_policy.kernel.errors.base import BaseError
from dataspace_policy.kernel.errors.policy import (
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
