"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nutrilog.api.analytics import router as analytics_router
from nutrilog.api.auth import router as auth_router
from nutrilog.api.meals import router as meals_router
from nutrilog.api.notifications import router as notifications_router
from nutrilog.api.users import router as users_router
from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer
from nutrilog.domain.errors import (
    AnalysisError,
    AnalysisRateLimitedError,
    AuthenticationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    NutrilogError,
    TransactionFailureError,
)

# Checked in order, so subclasses come before their parents.
ERROR_STATUS: tuple[tuple[type[NutrilogError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (TransactionFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (AnalysisRateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (AnalysisError, status.HTTP_502_BAD_GATEWAY),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def error_status(exc: NutrilogError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = app.state.container.reminder_scheduler
        if scheduler is not None:
            scheduler.start()
        yield
        if scheduler is not None:
            scheduler.shutdown()
        await app.state.container.close_resources()

    app = FastAPI(title="nutrilog", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NutrilogError)
    async def handle_domain_error(request: Request, exc: NutrilogError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "code": exc.code},
                exc_info=exc,
            )
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "code": exc.code},
        )

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(meals_router)
    app.include_router(analytics_router)
    app.include_router(notifications_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
