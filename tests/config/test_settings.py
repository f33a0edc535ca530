"""Tests for DecvalSettings — unified settings with TOML source."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from decval.config.discovery import CONFIG_FILENAME
from decval.config.settings import DecvalSettings, apply_settings, get_settings, reset_settings
from decval.domain.dates import get_default_format
from decval.domain.hashing import Hashing
from decval.exceptions import ConfigurationError
from decval.serialization.serializers import Serialization, YamlSerializer


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DECVAL_CONFIG", "DECVAL_SERIALIZATION__INDENT", "DECVAL_LOGGING__VERBOSE"):
        monkeypatch.delenv(name, raising=False)


class TestDecvalSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = DecvalSettings.load(start=tmp_path)
        assert settings.config_path is None
        assert settings.validation.date_format == "%Y-%m-%d"
        assert settings.serialization.default == "json"
        assert settings.hashing.default == "default"
        assert settings.logging.verbose is False
        assert settings.plugins.enabled is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = DecvalSettings.load(start=tmp_path)
        with pytest.raises(Exception):
            settings.config_path = tmp_path  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / CONFIG_FILENAME
        toml.write_text('[serialization]\ndefault = "yaml"\nindent = 4\n[validation]\ndate_format = "%d/%m/%Y"\n')
        settings = DecvalSettings.load(start=tmp_path)
        assert settings.config_path == toml
        assert settings.serialization.default == "yaml"
        assert settings.serialization.indent == 4
        assert settings.serialization.sort_keys is False  # default preserved
        assert settings.validation.date_format == "%d/%m/%Y"

    def test_discovered_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[hashing]\ndefault = "sha256"\n')
        child = tmp_path / "pkg" / "module"
        child.mkdir(parents=True)
        assert DecvalSettings.load(start=child).hashing.default == "sha256"

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert DecvalSettings.load(start=tmp_path).serialization.default == "json"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[logging]\nverbose = true\n")
        settings = DecvalSettings.load(config_path=str(custom))
        assert settings.logging.verbose is True
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[serialization\n")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            DecvalSettings.load(start=tmp_path)


class TestPriority:
    def test_init_overrides_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[serialization]\ndefault = "yaml"\n')
        settings = DecvalSettings.load(start=tmp_path, serialization={"default": "json"})
        assert settings.serialization.default == "json"

    def test_nested_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DECVAL_SERIALIZATION__INDENT", "2")
        settings = DecvalSettings.load(start=tmp_path)
        assert settings.serialization.indent == 2

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[logging]\nverbose = false\n")
        monkeypatch.setenv("DECVAL_LOGGING__VERBOSE", "true")
        assert DecvalSettings.load(start=tmp_path).logging.verbose is True


@pytest.mark.usefixtures("_isolated_cwd")
class TestProcessSettings:
    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_reset(self) -> None:
        first = get_settings()
        reset_settings()
        assert get_settings() is not first


class TestApplySettings:
    def test_pushes_runtime_defaults(self, tmp_path: Path) -> None:
        settings = DecvalSettings.load(
            start=tmp_path,
            validation={"date_format": "%d.%m.%Y"},
            serialization={"default": "yaml", "indent": 4},
            hashing={"default": "sha256"},
            plugins={"enabled": False},
        )
        assert apply_settings(settings) is settings
        assert get_settings() is settings
        assert get_default_format() == "%d.%m.%Y"
        assert Hashing.current() == "sha256"
        assert Serialization.current() == "yaml"
        serializer = Serialization.get("yaml")
        assert isinstance(serializer, YamlSerializer)
        assert serializer.indent == 4

    def test_configures_logging(self, tmp_path: Path) -> None:
        settings = DecvalSettings.load(start=tmp_path, logging={"verbose": True}, plugins={"enabled": False})
        apply_settings(settings)
        assert logging.getLogger("decval").level == logging.DEBUG

    def test_unknown_method_rejected(self, tmp_path: Path) -> None:
        settings = DecvalSettings.load(start=tmp_path, hashing={"default": "md5"}, plugins={"enabled": False})
        with pytest.raises(ConfigurationError, match="md5"):
            apply_settings(settings)
