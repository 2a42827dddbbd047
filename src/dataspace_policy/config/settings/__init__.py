"""Config settings – env-based configuration."""
from dataspace_policy.config.settings.base import Settings
from dataspace_policy.config.settings.engine import PolicyEngineSettings
from dataspace_policy.config.settings.factory import SettingsFactory
from dataspace_policy.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "PolicyEngineSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
