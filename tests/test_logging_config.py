"""Tests for singleton logging configuration and the request logger."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from pulsar_validator.logger import ValidationLogger
from pulsar_validator.logging_config import (
    _SUPPRESSED_LOGGERS,
    LOG_DATEFMT,
    LOG_FORMAT,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_flag() -> None:
    """Reset the singleton flag before each test."""
    import pulsar_validator.logging_config as mod

    mod._configured = False


def test_setup_logging_is_idempotent() -> None:
    with patch(
        "pulsar_validator.logging_config.logging.basicConfig"
    ) as mock_bc:
        setup_logging()
        setup_logging("DEBUG")  # second call is no-op
        mock_bc.assert_called_once()


def test_level_is_passed_through() -> None:
    with patch(
        "pulsar_validator.logging_config.logging.basicConfig"
    ) as mock_bc:
        setup_logging("warning")
    assert mock_bc.call_args.kwargs["level"] == logging.WARNING


def test_suppressed_loggers_at_warning() -> None:
    setup_logging()
    for name in _SUPPRESSED_LOGGERS:
        lg = logging.getLogger(name)
        assert lg.level == logging.WARNING, (
            f"Logger {name!r} level is {lg.level}, expected WARNING"
        )


def test_log_format_constants() -> None:
    assert "%(message)s" in LOG_FORMAT
    assert len(LOG_DATEFMT) > 0


class TestValidationLogger:
    def test_validation_record_is_json_line(self, tmp_path: Path) -> None:
        request_logger = ValidationLogger(tmp_path / "logs")
        try:
            request_logger.log_validation(
                request_id="abc123",
                challenge_id="1",
                score=90,
                readiness="excellent",
                issue_count=1,
                duration_ms=2.5,
            )
        finally:
            request_logger.close()

        line = (tmp_path / "logs" / "validation.log").read_text().strip()
        record = json.loads(line)
        assert record["type"] == "validation"
        assert record["request_id"] == "abc123"
        assert record["score"] == 90

    def test_error_is_truncated(self, tmp_path: Path) -> None:
        request_logger = ValidationLogger(tmp_path)
        try:
            request_logger.log_error("r1", "validator", "x" * 500)
        finally:
            request_logger.close()

        record = json.loads((tmp_path / "validation.log").read_text())
        assert record["component"] == "validator"
        assert len(record["error"]) == 200

    def test_level_filters_records(self, tmp_path: Path) -> None:
        request_logger = ValidationLogger(tmp_path, level="ERROR")
        try:
            request_logger.log_validation("r1", "1", 100, "excellent", 0, 1.0)
        finally:
            request_logger.close()

        assert (tmp_path / "validation.log").read_text() == ""
