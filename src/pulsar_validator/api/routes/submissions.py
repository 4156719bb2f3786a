"""Submission validation endpoint."""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from pulsar_validator.api.dependencies import (
    get_request_logger,
    get_validator,
)
from pulsar_validator.api.schemas import ValidationResponse
from pulsar_validator.constants import ID_HEX_LENGTH
from pulsar_validator.logger import ValidationLogger
from pulsar_validator.validation.schemas import ContentSubmission
from pulsar_validator.validation.validator import SubmissionValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/submissions", tags=["submissions"])

VALIDATE_PATH = f"{router.prefix}/validate"
FAILURE_MESSAGE = "Content validation failed"


@router.post("/validate")
async def validate_submission(
    submission: ContentSubmission,
    response: Response,
    validator: SubmissionValidator = Depends(get_validator),
    request_logger: ValidationLogger = Depends(get_request_logger),
) -> ValidationResponse:
    """Score a submission against platform and challenge rules."""
    request_id = uuid.uuid4().hex[:ID_HEX_LENGTH]
    start = time.perf_counter()

    try:
        result = validator.validate(submission)
    except Exception as exc:
        logger.exception(
            "event=validation_failed request_id=%s challenge_id=%s",
            request_id,
            submission.challenge_id or "-",
        )
        request_logger.log_error(request_id, "validator", str(exc))
        response.status_code = 500
        return ValidationResponse(
            success=False, error=FAILURE_MESSAGE
        )

    request_logger.log_validation(
        request_id=request_id,
        challenge_id=submission.challenge_id,
        score=result.score,
        readiness=result.readiness_level,
        issue_count=len(result.issues),
        duration_ms=round((time.perf_counter() - start) * 1000, 3),
    )
    return ValidationResponse(
        success=True, validation=result.to_payload()
    )


async def submission_request_error(
    request: Request, exc: RequestValidationError
) -> Response:
    """Answer unparseable submissions with the failure envelope.

    Other routes keep FastAPI's default 422 body.
    """
    if request.url.path != VALIDATE_PATH:
        return await request_validation_exception_handler(request, exc)

    logger.info(
        "event=submission_rejected errors=%d", len(exc.errors())
    )
    body = ValidationResponse(success=False, error=FAILURE_MESSAGE)
    return JSONResponse(status_code=422, content=body.model_dump())
