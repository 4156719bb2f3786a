"""FastAPI dependency injection for validator and catalog access."""

from __future__ import annotations

from fastapi import Request

from pulsar_validator.api.app_state import AppState
from pulsar_validator.logger import ValidationLogger
from pulsar_validator.validation.catalog import InMemoryRuleCatalog
from pulsar_validator.validation.validator import SubmissionValidator


def get_app_state(request: Request) -> AppState:
    """Get the typed AppState from app.state."""
    return request.app.state.typed  # type: ignore[no-any-return]


def get_validator(request: Request) -> SubmissionValidator:
    return get_app_state(request).validator


def get_catalog(request: Request) -> InMemoryRuleCatalog:
    return get_app_state(request).catalog


def get_request_logger(request: Request) -> ValidationLogger:
    return get_app_state(request).request_logger
