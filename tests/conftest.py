"""Shared fixtures for the test suite."""

from dataspace_policy.testing.fixtures import binding_registry, engine_builder  # noqa: F401
