"""Config settings – PolicyEngineSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from dataspace_policy.config.settings.base import Settings
from dataspace_policy.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class PolicyEngineSettings(Settings):
    """Runtime options of the policy engine.

    Attributes:
        validation_scopes: Scopes the validator resolves functions in. Empty
            means every scope that has functions registered.
        enforce_context_types: Reject contexts whose type does not match the
            type declared for the evaluated scope.
        log_level: Standard logging level name.
        json_logs: Render logs as JSON instead of console output.
    """

    _prefix: ClassVar[str] = "POLICY_ENGINE"

    validation_scopes: list[str] = dataclasses.field(default_factory=list)
    enforce_context_types: bool = True
    log_level: str = "INFO"
    json_logs: bool = False

    def _validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")


__all__ = ["PolicyEngineSettings"]
