"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from event_snaps.api.events import router as events_router
from event_snaps.app_logging import configure_logging
from event_snaps.containers import AppContainer
from event_snaps.domain.errors import (
    EventCodeUnavailableError,
    EventNotFoundError,
    EventSnapsError,
    NotEventOwnerError,
    NotParticipantError,
    PhotosLockedError,
    StorageError,
    UploadLimitReachedError,
    UploadNotAllowedError,
    ValidationError,
)

_ERROR_STATUS: dict[type[EventSnapsError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    EventNotFoundError: status.HTTP_404_NOT_FOUND,
    NotEventOwnerError: status.HTTP_403_FORBIDDEN,
    NotParticipantError: status.HTTP_403_FORBIDDEN,
    PhotosLockedError: status.HTTP_403_FORBIDDEN,
    UploadNotAllowedError: status.HTTP_403_FORBIDDEN,
    UploadLimitReachedError: status.HTTP_409_CONFLICT,
    EventCodeUnavailableError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_status(exc: EventSnapsError) -> int:
    """Return the HTTP status code for a domain error."""
    for error_type in type(exc).__mro__:
        code = _ERROR_STATUS.get(error_type)
        if code is not None:
            return code
    return status.HTTP_400_BAD_REQUEST


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Event Snaps")
    app.state.container = container

    app.include_router(events_router)

    @app.exception_handler(EventSnapsError)
    async def handle_domain_error(request: Request, exc: EventSnapsError) -> JSONResponse:
        code = error_status(exc)
        if isinstance(exc, StorageError):
            logger.error(
                "Storage failure on %s %s", request.method, request.url.path, exc_info=exc
            )
        return JSONResponse(status_code=code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
