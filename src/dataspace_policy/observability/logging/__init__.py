"""Observability – structured logging helpers."""
from dataspace_policy.observability.logging.factory import LoggerFactory, configure_logging
from dataspace_policy.observability.logging.processors import PolicyScopeProcessor, get_logger
from dataspace_policy.observability.logging.protocol import Logger

__all__ = [
    "Logger",
    "LoggerFactory",
    "PolicyScopeProcessor",
    "configure_logging",
    "get_logger",
]
