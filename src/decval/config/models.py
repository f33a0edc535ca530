"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, decval.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from decval.domain.keys import DEFAULT_DATE_FORMAT


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    date_format: str = DEFAULT_DATE_FORMAT


class SerializationConfig(BaseModel):
    """[serialization] section."""

    model_config = {"frozen": True}

    default: str = "json"
    indent: int | None = Field(default=None, ge=0)
    sort_keys: bool = False


class HashingConfig(BaseModel):
    """[hashing] section."""

    model_config = {"frozen": True}

    default: str = "default"


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
