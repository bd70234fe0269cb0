"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from eventface.adapters.supabase_rows import PHOTO_COLUMNS, parse_photo
from eventface.domain.photos import PhotoRecord
from eventface.errors import StorageError
from eventface.services.processing import PhotoRepository


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo rows; soft-deleted rows are filtered."""

    client: Client

    def create_photo(self, event_id: UUID, uploaded_by: UUID, url: str) -> PhotoRecord:
        """Create an unprocessed photo row and return it."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "event_id": str(event_id),
                    "uploaded_by": str(uploaded_by),
                    "url": url,
                    "processed": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create photo record")
        return parse_photo(response.data[0])

    def list_unprocessed(self, event_id: UUID) -> list[PhotoRecord]:
        """Return unprocessed photos of an event, oldest first."""
        response = (
            self.client.table("photos")
            .select(PHOTO_COLUMNS)
            .eq("event_id", str(event_id))
            .eq("processed", False)
            .is_("deleted_at", "null")
            .order("created_at", desc=False)
            .execute()
        )
        return [parse_photo(row) for row in response.data or []]

    def mark_processing_started(self, photo_id: UUID, started_at: datetime) -> None:
        """Stamp processing_started_at."""
        self.client.table("photos").update(
            {"processing_started_at": started_at.isoformat()}
        ).eq("id", str(photo_id)).execute()

    def mark_processed(self, photo_id: UUID, completed_at: datetime) -> None:
        """Flag a photo as processed."""
        self.client.table("photos").update(
            {
                "processed": True,
                "processing_completed_at": completed_at.isoformat(),
            }
        ).eq("id", str(photo_id)).execute()

    def count_photos(self, event_id: UUID, processed: bool | None = None) -> int:
        """Count non-deleted photos of an event."""
        query = (
            self.client.table("photos")
            .select("id", count="exact")
            .eq("event_id", str(event_id))
            .is_("deleted_at", "null")
        )
        if processed is not None:
            query = query.eq("processed", processed)
        response = query.execute()
        return response.count or 0

    def schedule_deletion(self, event_id: UUID, deletion_at: datetime) -> int:
        """Stamp deletion_scheduled_at on processed photos not yet scheduled."""
        response = (
            self.client.table("photos")
            .update({"deletion_scheduled_at": deletion_at.isoformat()})
            .eq("event_id", str(event_id))
            .eq("processed", True)
            .is_("deletion_scheduled_at", "null")
            .is_("deleted_at", "null")
            .execute()
        )
        return len(response.data or [])

    def list_expired(self, now: datetime) -> list[PhotoRecord]:
        """Return photos past their deletion deadline."""
        response = (
            self.client.table("photos")
            .select(PHOTO_COLUMNS)
            .lt("deletion_scheduled_at", now.isoformat())
            .is_("deleted_at", "null")
            .execute()
        )
        return [parse_photo(row) for row in response.data or []]

    def mark_deleted(self, photo_id: UUID, deleted_at: datetime) -> None:
        """Soft-delete a photo row."""
        response = (
            self.client.table("photos")
            .update({"deleted_at": deleted_at.isoformat()})
            .eq("id", str(photo_id))
            .execute()
        )
        if not response.data:
            raise StorageError(f"Failed to mark photo {photo_id} as deleted")
