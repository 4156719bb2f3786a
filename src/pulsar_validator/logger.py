"""JSON-lines request log for validation calls.

One record per line in ``<log_dir>/validation.log``, correlated by
the request id the submissions route generates. Kept apart from the
root logger so the file stays machine-readable.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pulsar_validator.constants import ERROR_TRUNCATION_CHARS

__all__ = ["ValidationLogger"]

_LOGGER_NAME = "pulsar_validator.requests"
_LOG_FILE = "validation.log"


class ValidationLogger:
    """Writes ``validation`` and ``error`` records."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger(_LOGGER_NAME)
        self._logger.setLevel(level.upper())
        self._logger.propagate = False

        if not self._logger.handlers:
            handler = logging.FileHandler(log_dir / _LOG_FILE)
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def _emit(self, level: int, record_type: str, **fields: Any) -> None:
        record = {
            "type": record_type,
            "timestamp": datetime.now(UTC).isoformat(),
            **fields,
        }
        self._logger.log(level, json.dumps(record))

    def log_validation(
        self,
        request_id: str,
        challenge_id: str,
        score: int,
        readiness: str,
        issue_count: int,
        duration_ms: float,
    ) -> None:
        self._emit(
            logging.INFO,
            "validation",
            request_id=request_id,
            challenge_id=challenge_id,
            score=score,
            readiness=readiness,
            issue_count=issue_count,
            duration_ms=duration_ms,
        )

    def log_error(self, request_id: str, component: str, error: str) -> None:
        self._emit(
            logging.ERROR,
            "error",
            request_id=request_id,
            component=component,
            error=error[:ERROR_TRUNCATION_CHARS],
        )

    def close(self) -> None:
        """Detach file handlers (on shutdown and between tests)."""
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)
