"""Config – settings dataclasses, loaders and configuration errors."""

from dataspace_policy.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    PolicyEngineSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from dataspace_policy.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PolicyEngineSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
