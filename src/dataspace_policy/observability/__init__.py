"""Observability – structured logging for the policy engine."""
