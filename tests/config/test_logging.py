"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest

from decval.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        logger = configure_logging(verbose=True, log_json=False)
        assert logger is logging.getLogger("decval")
        assert logger.level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("decval").level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        configure_logging(verbose=True, log_json=True)
        assert handler in root.handlers
        assert root.level == logging.INFO
        assert logging.getLogger("decval").propagate is False

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("decval.model.registry").debug("Model Probe re-registered", extra={"answer": 42})

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Model Probe re-registered"
        assert parsed["answer"] == 42
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "decval.model.registry"
        assert "timestamp" in parsed

    def test_below_level_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)

        logging.getLogger("decval.plugins.manager").info("Registered plugin: quiet")

        assert capfd.readouterr().err == ""

    def test_other_loggers_not_rendered(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("pluggy").warning("hook noise")

        assert '"event"' not in capfd.readouterr().err

    def test_idempotent_calls(self) -> None:
        """Repeated calls replace the handler instead of stacking it."""
        configure_logging(verbose=True, log_json=False)
        logger = configure_logging(verbose=True, log_json=True)
        assert len(logger.handlers) == 1
