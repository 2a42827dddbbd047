"""
dataspace_policy – Usage-policy evaluation and validation engine.

Import path convention::

    from dataspace_policy.model import Permission, AtomicConstraint, Operator
    from dataspace_policy.engine import PolicyEngineBuilder, RuleBindingRegistry
    from dataspace_policy.kernel.types import Ok, Err, Result
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
