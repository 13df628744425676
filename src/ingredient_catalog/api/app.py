"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ingredient_catalog.api.admin import router as admin_router
from ingredient_catalog.api.ingredients import router as ingredients_router
from ingredient_catalog.api.produce import router as produce_router
from ingredient_catalog.app_logging import configure_logging
from ingredient_catalog.containers import AppContainer
from ingredient_catalog.errors import (
    CatalogConflict,
    CatalogError,
    ExternalServiceUnavailable,
    NotFound,
    Unauthorized,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[CatalogError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (Unauthorized, status.HTTP_401_UNAUTHORIZED),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (CatalogConflict, status.HTTP_409_CONFLICT),
    (ExternalServiceUnavailable, status.HTTP_502_BAD_GATEWAY),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    debug_errors = container.settings.environment == "local"

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(ingredients_router)
    app.include_router(produce_router)
    app.include_router(admin_router)

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        for error_type, status_code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                    logger.warning(
                        "Upstream failure on %s %s: %s",
                        request.method,
                        request.url.path,
                        exc,
                    )
                return JSONResponse(status_code=status_code, content={"error": str(exc)})

        logger.error(
            "Request failed on %s %s", request.method, request.url.path, exc_info=exc
        )
        message = "Internal server error"
        if debug_errors:
            message = f"{message} ({type(exc).__name__})"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": message},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
