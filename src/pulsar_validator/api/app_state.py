"""Typed application state, read by the dependency getters."""

from __future__ import annotations

from dataclasses import dataclass

from pulsar_validator.config import Settings
from pulsar_validator.logger import ValidationLogger
from pulsar_validator.validation.catalog import InMemoryRuleCatalog
from pulsar_validator.validation.validator import SubmissionValidator


@dataclass
class AppState:
    """Typed container for app.state attributes."""

    settings: Settings
    catalog: InMemoryRuleCatalog
    validator: SubmissionValidator
    request_logger: ValidationLogger
