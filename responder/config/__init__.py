"""Configuration package for builder settings and startup validation."""

from .settings import ResponderSettings, SettingsLoadError, config_build_builder_config, config_load_settings

__all__ = ["ResponderSettings", "SettingsLoadError", "config_build_builder_config", "config_load_settings"]
