"""Shared test fixtures: submissions, catalogs, API app state."""

import os

# Tests never read a developer's .env catalog or API key.
os.environ["CATALOG_PATH"] = ""
os.environ["API_KEY"] = ""

from pathlib import Path
from typing import Any

import pytest

from pulsar_validator.api.app_state import AppState
from pulsar_validator.config import Settings
from pulsar_validator.logger import ValidationLogger
from pulsar_validator.main import app, install_state
from pulsar_validator.validation.catalog import (
    InMemoryRuleCatalog,
    StaticCustomFieldCatalog,
)
from pulsar_validator.validation.schemas import ContentSubmission
from pulsar_validator.validation.validator import SubmissionValidator

CATALOG_FILE = Path(__file__).resolve().parents[1] / "catalogs" / "challenges.yaml"


def make_submission(**overrides: Any) -> ContentSubmission:
    """A clean image submission with no issues; override any field."""
    payload: dict[str, Any] = {
        "contentType": "image",
        "title": "A Great Sunset Photo",
        "description": (
            "Golden light over the bay at dusk. "
            "Shot handheld on the pier."
        ),
        "content": "https://cdn.example.com/u/sunset.png",
        "metadata": {"format": "png", "fileSizeBytes": 500_000},
        "challengeId": "unconfigured",
        "userId": "user-1",
        "tags": [],
    }
    metadata = overrides.pop("metadata", None)
    if metadata is not None:
        payload["metadata"] = {**payload["metadata"], **metadata}
    payload.update(overrides)
    return ContentSubmission.model_validate(payload)


def setup_test_app(
    tmp_path: Path,
    *,
    api_key: str = "",
    catalog: InMemoryRuleCatalog | None = None,
) -> AppState:
    """Common app-state setup for API test fixtures.

    Installs a fresh catalog, validator and request logger on the
    app so tests never share mutable catalog state.
    """
    settings = Settings(api_key=api_key, log_dir=tmp_path / "logs")
    store = catalog if catalog is not None else InMemoryRuleCatalog()
    state = AppState(
        settings=settings,
        catalog=store,
        validator=SubmissionValidator(store, StaticCustomFieldCatalog()),
        request_logger=ValidationLogger(
            log_dir=settings.log_dir, level="INFO"
        ),
    )
    install_state(app, state)
    return state


@pytest.fixture
def validator() -> SubmissionValidator:
    """Validator over the built-in seed catalog."""
    return SubmissionValidator()
