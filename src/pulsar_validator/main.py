"""FastAPI application with lifespan startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pulsar_validator.logging_config import setup_logging

setup_logging()

from fastapi import FastAPI  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from pulsar_validator import __version__  # noqa: E402
from pulsar_validator.api.app_state import AppState  # noqa: E402
from pulsar_validator.api.middleware.auth import ApiKeyMiddleware  # noqa: E402
from pulsar_validator.api.routes import (  # noqa: E402
    challenges,
    health,
    submissions,
)
from pulsar_validator.config import Settings  # noqa: E402
from pulsar_validator.logger import ValidationLogger  # noqa: E402
from pulsar_validator.validation.catalog import (  # noqa: E402
    InMemoryRuleCatalog,
    StaticCustomFieldCatalog,
    load_catalog,
    load_custom_field_catalog,
)
from pulsar_validator.validation.validator import (  # noqa: E402
    SubmissionValidator,
)

_logger = logging.getLogger(__name__)


def build_app_state(settings: Settings) -> AppState:
    """Wire catalog, validator and request logger from settings.

    Raises FileNotFoundError / ValueError if a configured catalog
    file is missing or malformed.
    """
    if settings.catalog_path is not None:
        catalog = load_catalog(settings.catalog_path)
        custom_fields = load_custom_field_catalog(settings.catalog_path)
    else:
        catalog = InMemoryRuleCatalog()
        custom_fields = StaticCustomFieldCatalog()

    validator = SubmissionValidator(
        catalog,
        custom_fields,
        max_suggestions=settings.max_suggestions,
    )
    request_logger = ValidationLogger(
        log_dir=settings.log_dir, level=settings.log_level
    )
    return AppState(
        settings=settings,
        catalog=catalog,
        validator=validator,
        request_logger=request_logger,
    )


def install_state(app: FastAPI, state: AppState) -> None:
    app.state.settings = state.settings
    app.state.typed = state


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = _settings
    logging.getLogger().setLevel(settings.log_level)

    state = build_app_state(settings)
    install_state(app, state)

    _logger.info(
        "event=startup challenges=%d catalog=%s",
        len(state.catalog.challenge_ids()),
        settings.catalog_path or "built-in",
    )
    if not settings.api_key:
        _logger.warning(
            "event=no_api_key action=all_endpoints_public"
        )

    yield

    state.request_logger.close()


_settings = Settings()

app = FastAPI(
    title="Pulsar Validator",
    description="Content submission validation and scoring for Pulsar challenges",
    version=__version__,
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
    debug=_settings.debug_mode,
)

# Middleware stack (Starlette LIFO: last added = outermost = runs first)
#
# CORS must be outermost so OPTIONS preflight is answered before
# ApiKeyMiddleware rejects for missing X-API-Key.
app.add_middleware(ApiKeyMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origin_list,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "X-API-Key"],
    allow_credentials=False,
)

app.include_router(health.router)
app.include_router(submissions.router)
app.include_router(challenges.router)

app.add_exception_handler(
    RequestValidationError,
    submissions.submission_request_error,  # pyright: ignore[reportArgumentType]
)
