"""Tests for the optional X-API-Key guard."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from pulsar_validator.main import app
from tests.conftest import setup_test_app

KEY = "s3cret"


@pytest.fixture
async def client(tmp_path: Path):
    state = setup_test_app(tmp_path, api_key=KEY)
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as c:
        yield c
    state.request_logger.close()


class TestApiKeyMiddleware:
    async def test_missing_key_rejected(self, client: AsyncClient) -> None:
        resp = await client.get("/api/challenges")
        assert resp.status_code == 401
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Invalid or missing API key"

    async def test_wrong_key_rejected(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/challenges", headers={"X-API-Key": "nope"}
        )
        assert resp.status_code == 401

    async def test_correct_key_passes(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/challenges", headers={"X-API-Key": KEY}
        )
        assert resp.status_code == 200

    @pytest.mark.parametrize(
        "path", ["/api/health", "/api/health/detailed", "/api/openapi.json"]
    )
    async def test_exempt_paths(self, client: AsyncClient, path: str) -> None:
        resp = await client.get(path)
        assert resp.status_code == 200

    async def test_no_key_configured_is_open(self, tmp_path: Path) -> None:
        state = setup_test_app(tmp_path / "open")
        transport = ASGITransport(app=app)
        async with AsyncClient(
            transport=transport, base_url="http://test"
        ) as c:
            resp = await c.get("/api/challenges")
        state.request_logger.close()
        assert resp.status_code == 200
