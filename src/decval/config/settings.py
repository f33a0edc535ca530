"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — passed by the caller
  2. Env vars     — ``DECVAL_*`` prefix, ``__`` between section and key
  3. TOML file    — ``decval.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from decval.config.discovery import find_config
from decval.config.models import (
    HashingConfig,
    LoggingConfig,
    PluginsConfig,
    SerializationConfig,
    ValidationConfig,
)
from decval.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``decval.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigurationError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DecvalSettings(BaseSettings):
    """Library-wide settings, frozen after construction.

    Attributes:
        config_path: The ``decval.toml`` the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DECVAL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    serialization: SerializationConfig = Field(default_factory=SerializationConfig)
    hashing: HashingConfig = Field(default_factory=HashingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(cls, *, config_path: str | Path | None = None, start: Path | None = None, **overrides: Any) -> DecvalSettings:
        """Construct settings, discovering ``decval.toml`` unless *config_path* is given."""
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


_settings: DecvalSettings | None = None


def get_settings() -> DecvalSettings:
    """Process-wide settings, loaded on first access."""
    global _settings
    if _settings is None:
        _settings = DecvalSettings.load()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


def apply_settings(settings: DecvalSettings | None = None) -> DecvalSettings:
    """Push *settings* (default: :func:`get_settings`) into the runtime.

    Configures logging, the default date format, the default hashing method
    and the default serializer, and loads plugins when enabled.

    Raises:
        ConfigurationError: If a configured hashing or serialization method
            is not registered.
    """
    from decval.config.logging import configure_logging
    from decval.domain.dates import set_default_format
    from decval.domain.hashing import Hashing
    from decval.serialization.serializers import JSONSerializer, Serialization, YamlSerializer

    global _settings
    settings = settings or get_settings()
    _settings = settings

    configure_logging(verbose=settings.logging.verbose, log_json=settings.logging.log_json)
    set_default_format(settings.validation.date_format)
    Hashing.set_default(settings.hashing.default)

    options = {"indent": settings.serialization.indent, "sort_keys": settings.serialization.sort_keys}
    Serialization.register("json", JSONSerializer(**options))
    Serialization.register("yaml", YamlSerializer(**options))
    Serialization.set_default(settings.serialization.default)

    if settings.plugins.enabled:
        from decval.plugins.manager import PluginManager

        loaded = PluginManager().discover_and_load()
        logger.debug("Loaded plugins: %s", loaded)
    return settings
