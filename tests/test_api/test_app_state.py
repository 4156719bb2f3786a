"""Tests for typed AppState wiring."""

from __future__ import annotations

from pathlib import Path

import pytest

from pulsar_validator.config import Settings
from pulsar_validator.main import build_app_state
from tests.conftest import CATALOG_FILE


class TestBuildAppState:
    def test_built_in_catalog(self, tmp_path: Path) -> None:
        settings = Settings(log_dir=tmp_path, catalog_path=None)
        state = build_app_state(settings)
        try:
            assert state.settings is settings
            assert state.catalog.challenge_ids() == ["1"]
            assert state.validator.catalog is state.catalog
        finally:
            state.request_logger.close()

    def test_yaml_catalog(self, tmp_path: Path) -> None:
        settings = Settings(log_dir=tmp_path, catalog_path=CATALOG_FILE)
        state = build_app_state(settings)
        try:
            assert state.catalog.challenge_ids() == ["1", "soundwave"]
        finally:
            state.request_logger.close()

    def test_missing_catalog_fails_startup(self, tmp_path: Path) -> None:
        settings = Settings(
            log_dir=tmp_path, catalog_path=tmp_path / "missing.yaml"
        )
        with pytest.raises(FileNotFoundError):
            build_app_state(settings)
