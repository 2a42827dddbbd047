"""Testing fixtures – pytest fixtures for engine tests.

Enable in ``conftest.py``::

    pytest_plugins = ["dataspace_policy.testing.fixtures"]
"""
try:
    import pytest  # noqa: F401

    from dataspace_policy.testing.fixtures.engine import binding_registry, engine_builder

except ImportError:
    pass

__all__ = ["binding_registry", "engine_builder"]
