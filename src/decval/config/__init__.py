"""Configuration layer — settings, discovery and logging setup."""

from decval.config.settings import DecvalSettings, apply_settings, get_settings, reset_settings

__all__ = ["DecvalSettings", "apply_settings", "get_settings", "reset_settings"]
