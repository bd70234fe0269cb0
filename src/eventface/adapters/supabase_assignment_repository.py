"""Supabase-backed photographer assignment repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from eventface.adapters.supabase_rows import ASSIGNMENT_COLUMNS, parse_assignment
from eventface.domain.assignments import PhotographerAssignment
from eventface.errors import StorageError
from eventface.services.assignments import AssignmentRepository


@dataclass
class SupabaseAssignmentRepository(AssignmentRepository):
    """Supabase implementation for the event_photographers table."""

    client: Client

    def list_for_event(self, event_id: UUID) -> list[PhotographerAssignment]:
        """Return every assignment of an event."""
        response = (
            self.client.table("event_photographers")
            .select(ASSIGNMENT_COLUMNS)
            .eq("event_id", str(event_id))
            .execute()
        )
        return [parse_assignment(row) for row in response.data or []]

    def get_assignment(
        self, event_id: UUID, photographer_id: UUID
    ) -> PhotographerAssignment | None:
        """Return one assignment, if present."""
        response = (
            self.client.table("event_photographers")
            .select(ASSIGNMENT_COLUMNS)
            .eq("event_id", str(event_id))
            .eq("photographer_id", str(photographer_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_assignment(response.data[0])

    def create_assignment(
        self, event_id: UUID, photographer_id: UUID
    ) -> PhotographerAssignment:
        """Insert an assignment row."""
        response = (
            self.client.table("event_photographers")
            .insert(
                {
                    "event_id": str(event_id),
                    "photographer_id": str(photographer_id),
                    "uploads_complete": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to create photographer assignment")
        return parse_assignment(response.data[0])

    def record_progress(
        self,
        event_id: UUID,
        photographer_id: UUID,
        uploads_complete: bool,
        recorded_at: datetime,
    ) -> PhotographerAssignment:
        """Upsert the photographer's own row in a single statement."""
        response = (
            self.client.table("event_photographers")
            .upsert(
                {
                    "event_id": str(event_id),
                    "photographer_id": str(photographer_id),
                    "uploads_complete": uploads_complete,
                    "last_upload_at": recorded_at.isoformat(),
                },
                on_conflict="event_id,photographer_id",
            )
            .execute()
        )
        if not response.data:
            raise StorageError("Failed to record photographer progress")
        return parse_assignment(response.data[0])

    def delete_assignment(self, event_id: UUID, photographer_id: UUID) -> None:
        """Delete an assignment row."""
        self.client.table("event_photographers").delete().eq(
            "event_id", str(event_id)
        ).eq("photographer_id", str(photographer_id)).execute()
