"""FastAPI application with lifespan, error mapping and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from linguaqa.api.routes import admin, freelancers, health, reports
from linguaqa.core.config import AppSettings
from linguaqa.core.exceptions import (
    CacheError,
    ConcurrentUpdateError,
    InvalidStateError,
    LinguaQAError,
    NotFoundError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)
from linguaqa.services import QualityServices, build_services

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS: list[tuple[type[LinguaQAError], int]] = [
    (PermissionDeniedError, 403),
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (ConcurrentUpdateError, 409),
    (ValidationError, 422),
    (StoreError, 502),
    (CacheError, 502),
]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    configure_logging(app.state.settings.log_level)
    logger.info("LinguaQA starting (environment=%s)", app.state.settings.environment)
    yield


async def handle_domain_error(request: Request, exc: LinguaQAError) -> JSONResponse:
    for exc_type, status in ERROR_STATUS:
        if isinstance(exc, exc_type):
            break
    else:
        status = 500
    if status >= 500:
        logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


def create_app(settings: AppSettings | None = None, services: QualityServices | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = AppSettings()
    app = FastAPI(
        title="LinguaQA Quality Review Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services or build_services(settings)
    app.add_exception_handler(LinguaQAError, handle_domain_error)
    app.include_router(health.router)
    app.include_router(reports.router, prefix="/reports")
    app.include_router(freelancers.router, prefix="/freelancers")
    app.include_router(admin.router, prefix="/admin")
    return app
