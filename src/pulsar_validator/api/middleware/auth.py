"""Optional X-API-Key guard for the validation API."""

from __future__ import annotations

import hmac
import logging
from collections.abc import Iterable

from fastapi import Request, Response
from starlette.middleware.base import (
    BaseHTTPMiddleware,
    RequestResponseEndpoint,
)
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from pulsar_validator.api.schemas import APIResponse
from pulsar_validator.constants import (
    AUTH_EXEMPT_PATHS,
    AUTH_EXEMPT_PREFIXES,
)

logger = logging.getLogger(__name__)


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests without the configured key.

    The key is read from ``app.state.settings`` on every request, so
    an empty ``API_KEY`` leaves the API open. Health and docs paths
    and CORS preflights never need a key.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        exempt_paths: Iterable[str] = AUTH_EXEMPT_PATHS,
        exempt_prefixes: tuple[str, ...] = AUTH_EXEMPT_PREFIXES,
    ) -> None:
        super().__init__(app)
        self._exempt_paths = frozenset(exempt_paths)
        self._exempt_prefixes = exempt_prefixes

    def _is_exempt(self, request: Request) -> bool:
        path = request.url.path
        return (
            request.method == "OPTIONS"
            or path in self._exempt_paths
            or path.startswith(self._exempt_prefixes)
        )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        expected: str = request.app.state.settings.api_key
        if not expected or self._is_exempt(request):
            return await call_next(request)

        provided = request.headers.get("X-API-Key", "")
        if hmac.compare_digest(provided.encode(), expected.encode()):
            return await call_next(request)

        logger.warning(
            "event=auth_rejected method=%s path=%s key_present=%s",
            request.method,
            request.url.path,
            bool(provided),
        )
        body = APIResponse(success=False, error="Invalid or missing API key")
        return JSONResponse(status_code=401, content=body.model_dump())
