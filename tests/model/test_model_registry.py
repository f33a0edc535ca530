"""Tests for the model registry."""

from __future__ import annotations

import logging

import pytest

from decval.exceptions import ConfigurationError, ModelBuildError
from decval.model.registry import ModelRegistry, bulk_model_register, get_registry, set_registry


class Alpha:
    def __init__(self, data: dict | None = None) -> None:
        self.data = data


class Beta(Alpha):
    pass


class Strict:
    def __init__(self, data: dict) -> None:
        raise ValueError("rejected")


class TestModelRegistry:
    def test_register_default_name(self) -> None:
        registry = ModelRegistry()
        registry.register(Alpha)
        assert registry.get("Alpha") is Alpha
        assert "Alpha" in registry

    def test_register_rejects_non_class(self) -> None:
        with pytest.raises(ConfigurationError):
            ModelRegistry().register(lambda data: data)

    def test_last_registration_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = ModelRegistry(Alpha)
        with caplog.at_level(logging.INFO, logger="decval.model.registry"):
            registry.register(Beta, "Alpha")
        assert registry.get("Alpha") is Beta
        assert "re-registered" in caplog.text

    def test_get_missing(self) -> None:
        assert ModelRegistry().get("Nope") is None

    def test_build_passes_record(self) -> None:
        registry = ModelRegistry(("x.Alpha", Alpha))
        built = registry.build({"__model": "x.Alpha", "a": 1})
        assert isinstance(built, Alpha)
        assert built.data == {"__model": "x.Alpha", "a": 1}

    def test_build_wraps_constructor_errors(self) -> None:
        registry = ModelRegistry(Strict)
        with pytest.raises(ModelBuildError, match="rejected"):
            registry.build({}, "Strict")


class TestProcessRegistry:
    def test_bulk_register(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("decval.model.registry._registry", ModelRegistry())
        bulk_model_register(Alpha, ("beta", Beta))
        assert get_registry().names() == ["Alpha", "beta"]

    def test_set_registry_migrate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("decval.model.registry._registry", ModelRegistry(Alpha))
        replacement = ModelRegistry(Beta)
        set_registry(replacement, migrate=True)
        assert get_registry() is replacement
        assert replacement.names() == ["Beta", "Alpha"]
