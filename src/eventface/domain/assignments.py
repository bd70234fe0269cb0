"""Domain models for photographer assignments."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PhotographerAssignment:
    """A photographer assigned to an event and their upload progress."""

    event_id: UUID
    photographer_id: UUID
    uploads_complete: bool = False
    last_upload_at: datetime | None = None
