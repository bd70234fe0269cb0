"""Domain models for event photos."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PhotoRecord:
    """Represents a photo row; rows with deleted_at set are never returned."""

    id: UUID
    event_id: UUID
    uploaded_by: UUID
    url: str
    processed: bool = False
    processing_started_at: datetime | None = None
    processing_completed_at: datetime | None = None
    deletion_scheduled_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class IncomingFile:
    """An uploaded file as received from a photographer client.

    `size` is the declared length; it is set without `data` when the file
    was rejected as too large before being read.
    """

    filename: str
    content_type: str | None
    data: bytes
    size: int | None = None

    @property
    def byte_size(self) -> int:
        """Return the larger of the declared size and the data length."""
        return max(self.size or 0, len(self.data))
