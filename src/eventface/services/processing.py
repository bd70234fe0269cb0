"""Face recognition processing for event photos."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from eventface.adapters.face_api_client import FaceApiClient
from eventface.domain.photos import PhotoRecord
from eventface.errors import ExternalServiceError, RecognitionUnavailableError

logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photo rows."""

    def create_photo(self, event_id: UUID, uploaded_by: UUID, url: str) -> PhotoRecord:
        """Insert an unprocessed photo row and return it."""

    def list_unprocessed(self, event_id: UUID) -> list[PhotoRecord]:
        """Return photos of an event that still need processing."""

    def mark_processing_started(self, photo_id: UUID, started_at: datetime) -> None:
        """Stamp the time processing was last attempted."""

    def mark_processed(self, photo_id: UUID, completed_at: datetime) -> None:
        """Flag a photo as processed."""

    def count_photos(self, event_id: UUID, processed: bool | None = None) -> int:
        """Count photos of an event, optionally filtered by processed state."""

    def schedule_deletion(self, event_id: UUID, deletion_at: datetime) -> int:
        """Set a deletion deadline on processed, unscheduled photos of an event."""

    def list_expired(self, now: datetime) -> list[PhotoRecord]:
        """Return photos whose deletion deadline has passed."""

    def mark_deleted(self, photo_id: UUID, deleted_at: datetime) -> None:
        """Soft-delete a photo row."""


@dataclass(frozen=True)
class ProcessingSummary:
    """Outcome of a processing run for one event."""

    total: int
    processed: int
    failures: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        """Return a user-facing progress line."""
        return f"{self.processed} of {self.total} photos processed"


@dataclass
class ProcessingService:
    """Triggers the face recognition service photo by photo."""

    face_client: FaceApiClient
    photo_repository: PhotoRepository
    delay_seconds: float = 2.0

    async def ensure_available(self) -> None:
        """Raise RecognitionUnavailableError unless the service is ready."""
        try:
            health = await self.face_client.check_health()
        except ExternalServiceError as exc:
            raise RecognitionUnavailableError(str(exc)) from exc
        if not health.ready:
            raise RecognitionUnavailableError(
                f"Face API not ready (status={health.status}, "
                f"model_loaded={health.model_loaded})"
            )

    async def process_event(self, event_id: UUID) -> ProcessingSummary:
        """Process every unprocessed photo of an event, one at a time."""
        await self.ensure_available()
        photos = self.photo_repository.list_unprocessed(event_id)
        processed = 0
        failures: list[str] = []
        for index, photo in enumerate(photos):
            if index:
                await asyncio.sleep(self.delay_seconds)
            try:
                if await self.process_photo(photo):
                    processed += 1
            except ExternalServiceError as exc:
                logger.warning(
                    "Photo processing failed",
                    extra={"photo_id": str(photo.id), "error": str(exc)},
                )
                failures.append(f"photo {photo.id}: {exc}")
            except Exception as exc:
                logger.exception(
                    "Failed to record processing state", extra={"photo_id": str(photo.id)}
                )
                failures.append(f"photo {photo.id}: {exc}")
        summary = ProcessingSummary(
            total=len(photos), processed=processed, failures=failures
        )
        logger.info(
            "Processing run finished",
            extra={"event_id": str(event_id), "summary": summary.message},
        )
        return summary

    async def process_photo(self, photo: PhotoRecord) -> bool:
        """Process one photo; return False when it was already processed."""
        if photo.processed:
            return False
        self.photo_repository.mark_processing_started(photo.id, datetime.now(tz=UTC))
        await self.face_client.process_photo(photo.id)
        self.photo_repository.mark_processed(photo.id, datetime.now(tz=UTC))
        return True
