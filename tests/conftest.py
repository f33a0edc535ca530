"""Shared pytest fixtures for decval tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from decval.config.settings import reset_settings
from decval.domain.dates import get_default_format, set_default_format
from decval.domain.hashing import Hashing
from decval.serialization.serializers import Serialization
from decval.validation.registry import Validation
from tests.models import Address, User


@pytest.fixture(autouse=True)
def _isolated_registries() -> Generator[None]:
    """Drop custom validators and runtime defaults changed by a test."""
    hashing = Hashing.current()
    serialization = Serialization.current()
    date_format = get_default_format()
    serializers = dict(Serialization._cache)
    yield
    Serialization._cache.clear()
    Serialization._cache.update(serializers)
    Validation.reset()
    Hashing.set_default(hashing)
    Serialization.set_default(serialization)
    set_default_format(date_format)
    reset_settings()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no ``decval.toml`` above it."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DECVAL_CONFIG", raising=False)


@pytest.fixture
def address() -> Address:
    return Address({"street": "Main St", "city": "Lisbon"})


@pytest.fixture
def user(address: Address) -> User:
    return User({"name": "Alice", "email": "alice@example.com", "address": address})
