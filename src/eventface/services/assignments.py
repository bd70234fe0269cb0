"""Photographer assignment management."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from eventface.domain.assignments import PhotographerAssignment

logger = logging.getLogger(__name__)


class AssignmentRepository(Protocol):
    """Persistence interface for event photographer assignments."""

    def list_for_event(self, event_id: UUID) -> list[PhotographerAssignment]:
        """Return every assignment currently stored for an event."""

    def get_assignment(
        self, event_id: UUID, photographer_id: UUID
    ) -> PhotographerAssignment | None:
        """Return one assignment, if present."""

    def create_assignment(
        self, event_id: UUID, photographer_id: UUID
    ) -> PhotographerAssignment:
        """Create an assignment that has not completed uploads."""

    def record_progress(
        self,
        event_id: UUID,
        photographer_id: UUID,
        uploads_complete: bool,
        recorded_at: datetime,
    ) -> PhotographerAssignment:
        """Upsert the completion flag and last upload time for one photographer."""

    def delete_assignment(self, event_id: UUID, photographer_id: UUID) -> None:
        """Remove an assignment."""


@dataclass
class AssignmentService:
    """Administrative operations on photographer assignments."""

    repository: AssignmentRepository

    def assign(self, event_id: UUID, photographer_id: UUID) -> PhotographerAssignment:
        """Assign a photographer to an event, keeping an existing assignment."""
        existing = self.repository.get_assignment(event_id, photographer_id)
        if existing is not None:
            return existing
        assignment = self.repository.create_assignment(event_id, photographer_id)
        logger.info(
            "Photographer assigned",
            extra={"event_id": str(event_id), "photographer_id": str(photographer_id)},
        )
        return assignment

    def remove(self, event_id: UUID, photographer_id: UUID) -> None:
        """Remove a photographer from an event."""
        self.repository.delete_assignment(event_id, photographer_id)
        logger.info(
            "Photographer removed",
            extra={"event_id": str(event_id), "photographer_id": str(photographer_id)},
        )

    def list_for_event(self, event_id: UUID) -> list[PhotographerAssignment]:
        """Return the assignments of an event."""
        return self.repository.list_for_event(event_id)
