"""Domain models for events."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class EventStatus(StrEnum):
    """Stored lifecycle status of an event."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


# Statuses the automated path may advance to completed.
COMPLETABLE_STATUSES = frozenset({EventStatus.UPCOMING, EventStatus.ACTIVE})


@dataclass(frozen=True)
class EventRecord:
    """Represents an event stored in the database."""

    id: UUID
    code: str
    name: str
    date: date
    status: EventStatus
    description: str | None = None
    event_time: str | None = None
    location: str | None = None
    host_type: str | None = None
    host_name: str | None = None
    expected_attendees: int | None = None
    image_url: str | None = None


def project_status(event: EventRecord, today: date) -> EventStatus:
    """Return the display status, treating past-dated upcoming events as active."""
    if event.status == EventStatus.UPCOMING and event.date <= today:
        return EventStatus.ACTIVE
    return event.status
