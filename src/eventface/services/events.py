"""Event lookup and administrative status changes."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from eventface.domain.events import EventRecord, EventStatus
from eventface.errors import EventNotFoundError

logger = logging.getLogger(__name__)


class EventRepository(Protocol):
    """Persistence interface for events."""

    def get_event(self, event_id: UUID) -> EventRecord | None:
        """Return an event by id, if present."""

    def complete_event(self, event_id: UUID) -> EventRecord:
        """Move an upcoming or active event to completed.

        Raises StateConflictError when the stored status is anything else.
        """

    def set_status(self, event_id: UUID, status: EventStatus) -> EventRecord | None:
        """Write a status unconditionally and return the updated event."""


@dataclass
class EventService:
    """Service for reading events and manual status overrides."""

    repository: EventRepository

    def get_event(self, event_id: UUID) -> EventRecord:
        """Return an event or raise EventNotFoundError."""
        event = self.repository.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def complete_event(self, event_id: UUID) -> EventRecord:
        """Move an upcoming or active event to completed.

        Raises StateConflictError when the event already left that phase.
        """
        return self.repository.complete_event(event_id)

    def override_status(self, event_id: UUID, status: EventStatus) -> EventRecord:
        """Set an event status as an administrator."""
        event = self.repository.set_status(event_id, status)
        if event is None:
            raise EventNotFoundError(event_id)
        logger.info(
            "Event status overridden",
            extra={"event_id": str(event_id), "status": status.value},
        )
        return event
