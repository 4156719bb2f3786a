"""Tests for POST /api/submissions/validate."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from pulsar_validator.api.app_state import AppState
from pulsar_validator.main import app
from tests.conftest import setup_test_app

URL = "/api/submissions/validate"


def _payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "contentType": "image",
        "title": "A Great Sunset Photo",
        "description": (
            "Golden light over the bay at dusk. Shot handheld on the pier."
        ),
        "content": "https://cdn.example.com/u/sunset.png",
        "metadata": {"format": "png", "fileSizeBytes": 500_000},
        "challengeId": "unconfigured",
        "userId": "user-1",
        "tags": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def state(tmp_path: Path):
    state = setup_test_app(tmp_path)
    yield state
    state.request_logger.close()


@pytest.fixture
async def client(state: AppState):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as c:
        yield c


class TestValidateEndpoint:
    async def test_clean_submission(self, client: AsyncClient) -> None:
        resp = await client.post(URL, json=_payload())
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        validation = body["validation"]
        assert validation["isValid"] is True
        assert validation["score"] == 100
        assert validation["readinessLevel"] == "excellent"
        assert validation["challengeSpecificScore"] == 0
        assert "meetsQualityThreshold" not in validation

    async def test_invalid_submission_is_still_200(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(
            URL, json=_payload(title="Hi", challengeId="")
        )
        assert resp.status_code == 200
        validation = resp.json()["validation"]
        assert validation["isValid"] is False
        assert validation["readinessLevel"] == "not-ready"
        kinds = {(i["type"], i["category"]) for i in validation["issues"]}
        assert ("error", "content") in kinds
        assert ("error", "guidelines") in kinds

    async def test_seeded_challenge_rules_apply(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(
            URL, json=_payload(challengeId="1", tags=["other"])
        )
        validation = resp.json()["validation"]
        rule_ids = [i.get("ruleId") for i in validation["issues"]]
        assert "1-tags" in rule_ids
        assert validation["meetsQualityThreshold"] is True

    async def test_legacy_type_field_accepted(
        self, client: AsyncClient
    ) -> None:
        payload = _payload()
        payload["type"] = payload.pop("contentType")
        resp = await client.post(URL, json=payload)
        assert resp.status_code == 200
        assert resp.json()["validation"]["isValid"] is True

    async def test_custom_field_results(self, client: AsyncClient) -> None:
        resp = await client.post(
            URL,
            json=_payload(
                customFields={
                    "ridingExperience": "Intermediate",
                    "safetyGearUsed": False,
                }
            ),
        )
        fields = resp.json()["validation"]["customFieldValidation"]
        assert fields["ridingExperience"] == {"isValid": True}
        assert fields["safetyGearUsed"] == {
            "isValid": False,
            "message": "safetyGearUsed is required",
        }

    async def test_missing_content_type_is_422(
        self, client: AsyncClient
    ) -> None:
        payload = _payload()
        del payload["contentType"]
        resp = await client.post(URL, json=payload)
        assert resp.status_code == 422
        assert resp.json() == {
            "success": False,
            "validation": None,
            "error": "Content validation failed",
        }

    async def test_null_tags_read_as_empty(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(URL, json=_payload(tags=None))
        assert resp.status_code == 200
        validation = resp.json()["validation"]
        assert validation["isValid"] is True
        assert validation["score"] == 100

    async def test_null_challenge_id_is_a_guidelines_error(
        self, client: AsyncClient
    ) -> None:
        resp = await client.post(
            URL, json=_payload(challengeId=None, title=None)
        )
        assert resp.status_code == 200
        validation = resp.json()["validation"]
        assert validation["isValid"] is False
        kinds = {(i["type"], i["category"]) for i in validation["issues"]}
        assert ("error", "guidelines") in kinds
        assert ("error", "content") in kinds

    async def test_validator_failure_is_500(
        self, client: AsyncClient, tmp_path: Path
    ) -> None:
        resp = await client.post(
            URL,
            json=_payload(
                contentType="video",
                metadata={"format": "mp4", "resolution": "wide"},
            ),
        )
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"] == "Content validation failed"
        assert body["validation"] is None

        lines = (tmp_path / "logs" / "validation.log").read_text().splitlines()
        record = json.loads(lines[-1])
        assert record["type"] == "error"
        assert record["component"] == "validator"
        assert "Malformed resolution" in record["error"]

    async def test_successful_request_is_logged(
        self, client: AsyncClient, tmp_path: Path
    ) -> None:
        await client.post(URL, json=_payload(challengeId="1"))
        lines = (tmp_path / "logs" / "validation.log").read_text().splitlines()
        record = json.loads(lines[-1])
        assert record["type"] == "validation"
        assert record["challenge_id"] == "1"
        assert len(record["request_id"]) == 12
