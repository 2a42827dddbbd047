"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    """Base class for env-driven settings dataclasses.

    ``_prefix`` names the environment-variable namespace, e.g. ``"POLICY_ENGINE"``
    maps field ``log_level`` to ``POLICY_ENGINE_LOG_LEVEL``.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


__all__ = ["Settings"]
