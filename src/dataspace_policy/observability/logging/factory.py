"""Observability – LoggerFactory configuring structlog over stdlib logging."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

from dataspace_policy.observability.logging.processors import PolicyScopeProcessor

if TYPE_CHECKING:
    from dataspace_policy.config.settings import PolicyEngineSettings


class LoggerFactory:
    """Configure structlog with either JSON or console rendering."""

    @staticmethod
    def configure(level: int | str = logging.INFO, *, json: bool = False) -> None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            PolicyScopeProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        renderer: Any = (
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


def configure_logging(settings: "PolicyEngineSettings") -> None:
    """Apply the logging options of *settings* through :class:`LoggerFactory`."""
    LoggerFactory.configure(settings.log_level, json=settings.json_logs)


__all__ = ["LoggerFactory", "configure_logging"]
