"""Observability – get_logger helper and the policy-scope processor."""
from __future__ import annotations

from typing import Any

import structlog

from dataspace_policy.observability.logging.protocol import Logger


class PolicyScopeProcessor:
    """structlog processor that renames a bound ``scope`` to ``policy_scope``.

    Keeps engine log lines from clashing with collaborators that use ``scope``
    for their own purposes (OAuth scopes, DI scopes).

    Usage::

        structlog.configure(processors=[PolicyScopeProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        if "scope" in event_dict:
            event_dict.setdefault("policy_scope", event_dict.pop("scope"))
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Logger:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["PolicyScopeProcessor", "get_logger"]
