"""Tests for health endpoints."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from pulsar_validator import __version__
from pulsar_validator.main import app
from pulsar_validator.validation.catalog import InMemoryRuleCatalog
from tests.conftest import setup_test_app


async def _get(path: str) -> dict[str, object]:
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as c:
        resp = await c.get(path)
    assert resp.status_code == 200
    return resp.json()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, tmp_path: Path) -> None:
        state = setup_test_app(tmp_path)
        data = await _get("/api/health")
        state.request_logger.close()
        assert data["status"] == "healthy"
        assert data["version"] == __version__

    @pytest.mark.asyncio
    async def test_detailed_reports_catalog(self, tmp_path: Path) -> None:
        state = setup_test_app(tmp_path)
        data = await _get("/api/health/detailed")
        state.request_logger.close()
        assert data["status"] == "healthy"
        assert data["components"] == {
            "catalog": {
                "status": "loaded",
                "challenges": 1,
                "source": "built-in",
            }
        }

    @pytest.mark.asyncio
    async def test_empty_catalog_is_degraded(self, tmp_path: Path) -> None:
        state = setup_test_app(tmp_path, catalog=InMemoryRuleCatalog({}))
        data = await _get("/api/health/detailed")
        state.request_logger.close()
        assert data["status"] == "degraded"
