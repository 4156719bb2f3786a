"""Challenge validation configuration endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from pulsar_validator.api.dependencies import get_catalog
from pulsar_validator.api.schemas import APIResponse
from pulsar_validator.validation.catalog import (
    InMemoryRuleCatalog,
    merge_config,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/challenges", tags=["challenges"])


@router.get("/configuration")
async def get_configuration(
    response: Response,
    challenge_id: str | None = Query(default=None, alias="challengeId"),
    catalog: InMemoryRuleCatalog = Depends(get_catalog),
) -> APIResponse:
    """Return the validation configuration for one challenge."""
    if not challenge_id:
        response.status_code = 400
        return APIResponse(success=False, error="Challenge ID is required")

    config = catalog.get(challenge_id)
    if config is None:
        response.status_code = 404
        return APIResponse(
            success=False, error="Challenge configuration not found"
        )

    return APIResponse(success=True, data=config.to_payload())


@router.put("/configuration")
async def put_configuration(
    response: Response,
    body: dict[str, Any] = Body(...),
    catalog: InMemoryRuleCatalog = Depends(get_catalog),
) -> APIResponse:
    """Create or update a challenge configuration.

    Top-level keys in the body replace the stored ones; the
    version is bumped on every write.
    """
    challenge_id = str(body.get("challengeId", "")).strip()
    if not challenge_id:
        response.status_code = 400
        return APIResponse(success=False, error="Challenge ID is required")

    updated_by = str(body.pop("updatedBy", "") or "api")
    try:
        config = merge_config(
            catalog.get(challenge_id), body, updated_by=updated_by
        )
    except (ValueError, TypeError, AttributeError) as exc:
        logger.warning(
            "event=config_rejected challenge_id=%s error=%s",
            challenge_id,
            exc,
        )
        response.status_code = 400
        return APIResponse(success=False, error=str(exc))

    catalog.upsert(config)
    return APIResponse(success=True, data=config.to_payload())


@router.get("")
async def list_challenges(
    catalog: InMemoryRuleCatalog = Depends(get_catalog),
) -> APIResponse:
    """List ids of challenges with a validation configuration."""
    ids = catalog.challenge_ids()
    return APIResponse(
        success=True, data=ids, metadata={"count": len(ids)}
    )
