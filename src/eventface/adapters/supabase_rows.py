"""Row parsing helpers shared by Supabase repositories."""

from datetime import date, datetime
from uuid import UUID

from eventface.domain.assignments import PhotographerAssignment
from eventface.domain.events import EventRecord, EventStatus
from eventface.domain.photos import PhotoRecord

EVENT_COLUMNS = (
    "id, qr_code, name, description, date, event_time, location, host_type, "
    "host_name, expected_attendees, image_url, status"
)
ASSIGNMENT_COLUMNS = "event_id, photographer_id, uploads_complete, last_upload_at"
PHOTO_COLUMNS = (
    "id, event_id, uploaded_by, url, processed, processing_started_at, "
    "processing_completed_at, deletion_scheduled_at, deleted_at"
)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column, allowing nulls."""
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def parse_event(row: dict[str, object]) -> EventRecord:
    expected = row.get("expected_attendees")
    return EventRecord(
        id=UUID(str(row["id"])),
        code=str(row.get("qr_code") or ""),
        name=str(row.get("name", "")),
        date=date.fromisoformat(str(row["date"])[:10]),
        status=EventStatus(str(row["status"])),
        description=row.get("description"),
        event_time=row.get("event_time"),
        location=row.get("location"),
        host_type=row.get("host_type"),
        host_name=row.get("host_name"),
        expected_attendees=int(expected) if expected is not None else None,
        image_url=row.get("image_url"),
    )


def parse_assignment(row: dict[str, object]) -> PhotographerAssignment:
    return PhotographerAssignment(
        event_id=UUID(str(row["event_id"])),
        photographer_id=UUID(str(row["photographer_id"])),
        uploads_complete=bool(row.get("uploads_complete", False)),
        last_upload_at=parse_timestamp(row.get("last_upload_at")),
    )


def parse_photo(row: dict[str, object]) -> PhotoRecord:
    return PhotoRecord(
        id=UUID(str(row["id"])),
        event_id=UUID(str(row["event_id"])),
        uploaded_by=UUID(str(row["uploaded_by"])),
        url=str(row.get("url", "")),
        processed=bool(row.get("processed", False)),
        processing_started_at=parse_timestamp(row.get("processing_started_at")),
        processing_completed_at=parse_timestamp(row.get("processing_completed_at")),
        deletion_scheduled_at=parse_timestamp(row.get("deletion_scheduled_at")),
        deleted_at=parse_timestamp(row.get("deleted_at")),
    )
