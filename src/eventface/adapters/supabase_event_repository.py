"""Supabase-backed event repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from eventface.adapters.supabase_rows import EVENT_COLUMNS, parse_event
from eventface.domain.events import COMPLETABLE_STATUSES, EventRecord, EventStatus
from eventface.errors import EventNotFoundError, StateConflictError
from eventface.services.events import EventRepository


@dataclass
class SupabaseEventRepository(EventRepository):
    """Supabase implementation for event reads and status writes."""

    client: Client

    def get_event(self, event_id: UUID) -> EventRecord | None:
        """Return an event by id, if present."""
        response = (
            self.client.table("events")
            .select(EVENT_COLUMNS)
            .eq("id", str(event_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_event(response.data[0])

    def complete_event(self, event_id: UUID) -> EventRecord:
        """Conditionally write completed; only one concurrent caller matches."""
        response = (
            self.client.table("events")
            .update(
                {
                    "status": EventStatus.COMPLETED.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(event_id))
            .in_("status", sorted(status.value for status in COMPLETABLE_STATUSES))
            .execute()
        )
        if response.data:
            return parse_event(response.data[0])
        current = self.get_event(event_id)
        if current is None:
            raise EventNotFoundError(event_id)
        raise StateConflictError(event_id, current.status.value)

    def set_status(self, event_id: UUID, status: EventStatus) -> EventRecord | None:
        """Write a status unconditionally."""
        response = (
            self.client.table("events")
            .update(
                {
                    "status": status.value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(event_id))
            .execute()
        )
        if not response.data:
            return None
        return parse_event(response.data[0])
