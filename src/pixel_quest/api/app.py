"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pixel_quest.api.auth import router as auth_router
from pixel_quest.api.todos import router as todos_router
from pixel_quest.api.ui import router as ui_router
from pixel_quest.app_logging import configure_logging
from pixel_quest.containers import AppContainer
from pixel_quest.domain.errors import (
    InvalidCredentialsError,
    InvalidInputError,
    NotFoundError,
    PixelQuestError,
    UnauthenticatedError,
)

_ERROR_STATUS: dict[type[PixelQuestError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidInputError: 422,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Pixel Quest")
    app.state.container = container

    app.include_router(ui_router)
    app.include_router(auth_router)
    app.include_router(todos_router)

    @app.exception_handler(PixelQuestError)
    async def handle_domain_error(
        request: Request, exc: PixelQuestError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "Request rejected",
            extra={
                "path": request.url.path,
                "error": type(exc).__name__,
                "status_code": status_code,
            },
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: PixelQuestError) -> int:
    """Map a domain error to its HTTP status."""
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
