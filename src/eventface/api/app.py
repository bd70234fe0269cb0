"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID

from fastapi import FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from eventface.api.admin import router as admin_router
from eventface.api.serializers import (
    serialize_batch,
    serialize_outcome,
    serialize_status,
)
from eventface.app_logging import configure_logging
from eventface.containers import AppContainer
from eventface.domain.photos import IncomingFile
from eventface.errors import (
    ConfigurationError,
    EventNotFoundError,
    RecognitionUnavailableError,
    StateConflictError,
    StorageError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(EventNotFoundError)
    async def event_not_found(_: Request, exc: EventNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def invalid_request(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(StateConflictError)
    async def state_conflict(_: Request, exc: StateConflictError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={"detail": f"Event is {exc.status}; uploads are closed."},
        )

    @app.exception_handler(StorageError)
    async def storage_failed(_: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage write failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Could not save your changes. Please try again."},
        )

    @app.exception_handler(RecognitionUnavailableError)
    async def recognition_unavailable(
        _: Request, exc: RecognitionUnavailableError
    ) -> JSONResponse:
        logger.warning("Face API unavailable: %s", exc)
        return JSONResponse(
            status_code=503,
            content={"detail": "Face recognition service is not available."},
        )

    @app.exception_handler(ConfigurationError)
    async def misconfigured(_: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("Configuration error: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Service misconfigured."})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/events/{event_id}/photographers/{photographer_id}/photos")
    async def upload_photos(
        event_id: UUID,
        photographer_id: UUID,
        request: Request,
        files: list[UploadFile] = File(...),
    ) -> dict[str, object]:
        """Upload a batch of photos for one photographer."""
        state_container: AppContainer = request.app.state.container
        max_bytes = state_container.upload_service.max_upload_bytes
        incoming = [await _read_upload(upload, max_bytes) for upload in files]
        result = state_container.upload_service.ingest_batch(
            event_id, photographer_id, incoming
        )
        if result.uploaded == 0:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={
                    "error": "Failed to upload any photos",
                    **serialize_batch(result),
                },
            )
        return serialize_batch(result)

    @app.post("/events/{event_id}/photographers/{photographer_id}/done")
    async def mark_done(
        event_id: UUID, photographer_id: UUID, request: Request
    ) -> dict[str, object]:
        """Signal that a photographer has finished uploading."""
        state_container: AppContainer = request.app.state.container
        outcome = await state_container.upload_service.mark_done(
            event_id, photographer_id
        )
        return serialize_outcome(outcome)

    @app.get("/events/{event_id}/status")
    async def event_status(event_id: UUID, request: Request) -> dict[str, object]:
        """Return the coordination state of an event."""
        state_container: AppContainer = request.app.state.container
        view = state_container.lifecycle_service.describe(
            event_id, datetime.now(tz=UTC).date()
        )
        return serialize_status(view)

    return app


async def _read_upload(upload: UploadFile, max_bytes: int) -> IncomingFile:
    """Read an upload, skipping the body when its declared size is too large."""
    filename = upload.filename or "upload"
    if upload.size is not None and upload.size > max_bytes:
        return IncomingFile(
            filename=filename,
            content_type=upload.content_type,
            data=b"",
            size=upload.size,
        )
    return IncomingFile(
        filename=filename, content_type=upload.content_type, data=await upload.read()
    )
