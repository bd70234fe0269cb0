"""Photographer upload sessions."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from eventface.adapters.supabase_blob_store import BlobStore
from eventface.domain.assignments import PhotographerAssignment
from eventface.domain.events import COMPLETABLE_STATUSES
from eventface.domain.photos import IncomingFile
from eventface.errors import StateConflictError, StorageError, ValidationError
from eventface.services.assignments import AssignmentRepository
from eventface.services.lifecycle import LifecycleOutcome, LifecycleService
from eventface.services.processing import PhotoRepository

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


@dataclass(frozen=True)
class UploadBatchResult:
    """Outcome of ingesting one batch of files."""

    total: int
    photo_ids: list[UUID] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    @property
    def uploaded(self) -> int:
        """Return the number of stored photos."""
        return len(self.photo_ids)

    @property
    def failed(self) -> int:
        """Return the number of rejected or failed files."""
        return len(self.failures)

    @property
    def message(self) -> str:
        """Return a user-facing progress line."""
        return f"{self.uploaded} of {self.total} photos uploaded"


@dataclass
class UploadService:
    """Ingests photographer batches and tracks their completion flags."""

    photo_repository: PhotoRepository
    assignment_repository: AssignmentRepository
    blob_store: BlobStore
    lifecycle_service: LifecycleService
    max_upload_bytes: int
    max_files_per_batch: int

    def ingest_batch(
        self, event_id: UUID, photographer_id: UUID, files: Sequence[IncomingFile]
    ) -> UploadBatchResult:
        """Store each file and photo row; failures are collected per file.

        Raises StateConflictError once the event has left the upload phase,
        and StorageError when the photographer's progress cannot be recorded
        after photos were stored.
        """
        if not files:
            raise ValidationError("Please select at least one photo to upload")
        if len(files) > self.max_files_per_batch:
            raise ValidationError(
                f"You can only upload {self.max_files_per_batch} images at a time"
            )
        event = self.lifecycle_service.event_service.get_event(event_id)
        if event.status not in COMPLETABLE_STATUSES:
            raise StateConflictError(event_id, event.status.value)

        photo_ids: list[UUID] = []
        failures: list[str] = []
        for incoming in files:
            stored_key: str | None = None
            try:
                content_type = validate_image(incoming, self.max_upload_bytes)
                key = f"{uuid4()}.{_EXTENSIONS[content_type]}"
                url = self.blob_store.put(key, incoming.data, content_type)
                stored_key = key
                photo = self.photo_repository.create_photo(
                    event_id=event_id, uploaded_by=photographer_id, url=url
                )
            except ValidationError as exc:
                logger.warning(
                    "Rejected upload",
                    extra={"upload_name": incoming.filename, "error": str(exc)},
                )
                failures.append(f"{incoming.filename}: {exc}")
                continue
            except Exception as exc:
                logger.exception(
                    "Failed to store upload",
                    extra={"upload_name": incoming.filename, "event_id": str(event_id)},
                )
                if stored_key is not None:
                    self._discard_blob(stored_key)
                failures.append(f"{incoming.filename}: {exc}")
                continue
            photo_ids.append(photo.id)

        if photo_ids:
            try:
                self.mark_active(event_id, photographer_id)
            except StorageError:
                logger.error(
                    "Photos stored but upload progress not recorded",
                    extra={
                        "event_id": str(event_id),
                        "photographer_id": str(photographer_id),
                        "photo_ids": [str(photo_id) for photo_id in photo_ids],
                    },
                )
                raise
        result = UploadBatchResult(
            total=len(files), photo_ids=photo_ids, failures=failures
        )
        logger.info(
            "Upload batch finished",
            extra={
                "event_id": str(event_id),
                "photographer_id": str(photographer_id),
                "summary": result.message,
            },
        )
        return result

    def mark_active(
        self, event_id: UUID, photographer_id: UUID
    ) -> PhotographerAssignment:
        """Record new uploads; a photographer who was done is no longer done."""
        try:
            return self.assignment_repository.record_progress(
                event_id=event_id,
                photographer_id=photographer_id,
                uploads_complete=False,
                recorded_at=datetime.now(tz=UTC),
            )
        except StorageError:
            raise
        except Exception as exc:
            logger.exception(
                "Failed to record upload progress",
                extra={"event_id": str(event_id), "photographer_id": str(photographer_id)},
            )
            raise StorageError("Could not record upload progress") from exc

    def _discard_blob(self, key: str) -> None:
        try:
            self.blob_store.remove(key)
        except Exception:
            logger.exception("Failed to remove orphaned blob", extra={"key": key})

    async def mark_done(
        self, event_id: UUID, photographer_id: UUID
    ) -> LifecycleOutcome:
        """Flag this photographer as done and re-evaluate the event."""
        self.lifecycle_service.event_service.get_event(event_id)
        try:
            self.assignment_repository.record_progress(
                event_id=event_id,
                photographer_id=photographer_id,
                uploads_complete=True,
                recorded_at=datetime.now(tz=UTC),
            )
        except StorageError:
            logger.exception(
                "Failed to record upload completion",
                extra={"event_id": str(event_id), "photographer_id": str(photographer_id)},
            )
            raise
        except Exception as exc:
            logger.exception(
                "Failed to record upload completion",
                extra={"event_id": str(event_id), "photographer_id": str(photographer_id)},
            )
            raise StorageError("Could not record upload completion") from exc
        return await self.lifecycle_service.evaluate(event_id)


def validate_image(incoming: IncomingFile, max_bytes: int) -> str:
    """Return the image content type or raise ValidationError."""
    if not incoming.content_type or not incoming.content_type.startswith("image/"):
        raise ValidationError("Only image files are accepted")
    if incoming.byte_size > max_bytes:
        raise ValidationError(f"File exceeds the {max_bytes} byte limit")
    if not incoming.data:
        raise ValidationError("File is empty")
    detected = detect_image_type(incoming.data)
    if detected is None:
        raise ValidationError("File content is not a supported image")
    return detected


def detect_image_type(data: bytes) -> str | None:
    """Infer an image MIME type from file signatures."""
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None
