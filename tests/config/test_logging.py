"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from careride.config.logging import bind_actor, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    care = logging.getLogger("careride")
    care_level = care.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    care.setLevel(care_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("careride").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("careride").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("careride.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "careride.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("careride.services.entitlement").info("boost purchased")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "boost purchased"
        assert parsed["logger"] == "careride.services.entitlement"

    def test_bound_actor_on_every_line(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_actor(patient_id="patient_009", doctor_id="doc_004")
        structlog.get_logger("careride.test").info("hello")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["patient_id"] == "patient_009"
        assert parsed["doctor_id"] == "doc_004"

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("careride.test").info("hidden")
        assert capfd.readouterr().err == ""
