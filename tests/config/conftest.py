"""Fixtures for config tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and ``decval`` logger state after each test."""
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    root_level = root.level
    decval = logging.getLogger("decval")
    decval_handlers = decval.handlers[:]
    decval_level = decval.level
    decval_propagate = decval.propagate
    yield
    root.handlers = root_handlers
    root.setLevel(root_level)
    decval.handlers = decval_handlers
    decval.setLevel(decval_level)
    decval.propagate = decval_propagate
