"""Retention scheduling and sweeping of processed photos."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from eventface.adapters.supabase_blob_store import BlobStore, storage_key_from_url
from eventface.domain.events import EventStatus
from eventface.services.events import EventService
from eventface.services.processing import PhotoRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one retention sweep."""

    deleted_count: int
    errors: list[str] = field(default_factory=list)


@dataclass
class RetentionService:
    """Stamps deletion deadlines and purges expired photos."""

    photo_repository: PhotoRepository
    event_service: EventService
    blob_store: BlobStore
    retention_days: int = 7

    def schedule_event(self, event_id: UUID) -> int:
        """Schedule deletion of processed photos of a completed event."""
        event = self.event_service.get_event(event_id)
        if event.status != EventStatus.COMPLETED:
            logger.warning(
                "Skipping retention scheduling for event that is not completed",
                extra={"event_id": str(event_id), "status": event.status.value},
            )
            return 0
        deletion_at = datetime.now(tz=UTC) + timedelta(days=self.retention_days)
        scheduled = self.photo_repository.schedule_deletion(event_id, deletion_at)
        logger.info(
            "Scheduled photos for deletion",
            extra={
                "event_id": str(event_id),
                "scheduled": scheduled,
                "deletion_at": deletion_at.isoformat(),
            },
        )
        return scheduled

    def sweep(self, now: datetime | None = None) -> SweepResult:
        """Delete every photo whose deadline has passed, one at a time."""
        current = now or datetime.now(tz=UTC)
        photos = self.photo_repository.list_expired(current)
        if not photos:
            logger.info("No photos to delete")
            return SweepResult(deleted_count=0)

        deleted = 0
        errors: list[str] = []
        for photo in photos:
            try:
                key = storage_key_from_url(photo.url)
                if key:
                    self.blob_store.remove(key)
                self.photo_repository.mark_deleted(photo.id, current)
            except Exception as exc:
                logger.exception(
                    "Failed to delete photo", extra={"photo_id": str(photo.id)}
                )
                errors.append(f"photo {photo.id}: {exc}")
                continue
            deleted += 1
        logger.info(
            "Retention sweep finished",
            extra={"deleted": deleted, "failed": len(errors)},
        )
        return SweepResult(deleted_count=deleted, errors=errors)
