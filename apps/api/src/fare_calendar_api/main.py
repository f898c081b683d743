"""FastAPI application factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fare_calendar_api.config import settings
from fare_calendar_api.routers import calendar, health, search
from fare_calendar_api.schemas.common import ErrorResponse
from fare_calendar_engine.errors import (
    ConfigurationError,
    ProviderError,
    UpstreamAuthError,
    ValidationError,
)

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)


def _error(status_code: int, payload: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(exclude_none=True),
    )


async def _validation_error(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, RequestValidationError):
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"] if p != "body") or "body"
            for err in exc.errors()
        )
        message = f"Invalid request fields: {fields}"
    else:
        message = str(exc)
    return _error(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(message=message, code="validation_error"),
    )


async def _configuration_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Calendar configuration error: %s", exc)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="Offer search API credentials not configured",
            code="configuration_error",
        ),
    )


async def _upstream_auth_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Offer search provider rejected credentials: %s", exc)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="Offer search provider rejected credentials",
            code="upstream_auth_error",
        ),
    )


async def _provider_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Offer search failed: %s", exc)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            message=str(exc) or "Failed to search flights", code="provider_error"
        ),
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Request failed")
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(message=str(exc) or "Request failed"),
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    app = FastAPI(title="Fare Calendar API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ConfigurationError, _configuration_error)
    app.add_exception_handler(UpstreamAuthError, _upstream_auth_error)
    app.add_exception_handler(ProviderError, _provider_error)
    app.add_exception_handler(Exception, _unhandled_error)

    # Routers
    _prefix = "/api"
    app.include_router(search.router, prefix=_prefix)
    app.include_router(calendar.router, prefix=_prefix)
    app.include_router(health.router, prefix=_prefix)

    return app


app = create_app()
