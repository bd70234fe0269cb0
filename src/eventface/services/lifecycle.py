"""Event lifecycle transitions driven by photographer completion."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from eventface.domain.events import EventRecord, EventStatus, project_status
from eventface.errors import RecognitionUnavailableError, StateConflictError
from eventface.services.assignments import AssignmentRepository
from eventface.services.completion import CompletionSnapshot, is_complete, snapshot
from eventface.services.events import EventService
from eventface.services.processing import (
    PhotoRepository,
    ProcessingService,
    ProcessingSummary,
)
from eventface.services.retention import RetentionService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LifecycleOutcome:
    """Result of evaluating or advancing an event."""

    event_id: UUID
    status: EventStatus
    completion: CompletionSnapshot
    completed_now: bool = False
    processing: ProcessingSummary | None = None
    scheduled_for_deletion: int = 0


@dataclass(frozen=True)
class EventStatusView:
    """Read model of an event's coordination state."""

    event: EventRecord
    projected_status: EventStatus
    completion: CompletionSnapshot
    total_photos: int
    processed_photos: int


@dataclass
class LifecycleService:
    """Advances events to completed and runs the follow-up work."""

    event_service: EventService
    assignment_repository: AssignmentRepository
    photo_repository: PhotoRepository
    processing_service: ProcessingService
    retention_service: RetentionService

    async def evaluate(self, event_id: UUID) -> LifecycleOutcome:
        """Re-read all assignments and complete the event when everyone is done."""
        event = self.event_service.get_event(event_id)
        assignments = self.assignment_repository.list_for_event(event_id)
        progress = snapshot(assignments)
        if not is_complete(assignments):
            logger.info(
                "Event still waiting on photographers",
                extra={"event_id": str(event_id), "pending": progress.pending},
            )
            return LifecycleOutcome(
                event_id=event_id, status=event.status, completion=progress
            )
        return await self.complete_event(event_id, progress)

    async def complete_event(
        self, event_id: UUID, progress: CompletionSnapshot | None = None
    ) -> LifecycleOutcome:
        """Mark an event completed, then process and schedule its photos.

        Repeat calls are no-ops: only the call that performs the status
        write triggers processing and retention scheduling.
        """
        if progress is None:
            progress = snapshot(self.assignment_repository.list_for_event(event_id))
        try:
            self.event_service.complete_event(event_id)
        except StateConflictError as exc:
            logger.info(
                "Event already past the upload phase",
                extra={"event_id": str(event_id), "status": exc.status},
            )
            return LifecycleOutcome(
                event_id=event_id,
                status=EventStatus(exc.status) if exc.status else EventStatus.COMPLETED,
                completion=progress,
            )

        logger.info("Event completed", extra={"event_id": str(event_id)})
        processing = await self._process_photos(event_id)
        scheduled = self.retention_service.schedule_event(event_id)
        self._check_photo_counts(event_id)
        return LifecycleOutcome(
            event_id=event_id,
            status=EventStatus.COMPLETED,
            completion=progress,
            completed_now=True,
            processing=processing,
            scheduled_for_deletion=scheduled,
        )

    async def reprocess(self, event_id: UUID) -> LifecycleOutcome:
        """Retry processing for an event's unprocessed photos.

        Raises RecognitionUnavailableError when the service is not ready.
        """
        event = self.event_service.get_event(event_id)
        processing = await self.processing_service.process_event(event_id)
        scheduled = 0
        if event.status == EventStatus.COMPLETED:
            scheduled = self.retention_service.schedule_event(event_id)
        return LifecycleOutcome(
            event_id=event_id,
            status=event.status,
            completion=snapshot(self.assignment_repository.list_for_event(event_id)),
            processing=processing,
            scheduled_for_deletion=scheduled,
        )

    def describe(self, event_id: UUID, today: date) -> EventStatusView:
        """Return stored and projected status with upload and photo progress."""
        event = self.event_service.get_event(event_id)
        return EventStatusView(
            event=event,
            projected_status=project_status(event, today),
            completion=snapshot(self.assignment_repository.list_for_event(event_id)),
            total_photos=self.photo_repository.count_photos(event_id),
            processed_photos=self.photo_repository.count_photos(
                event_id, processed=True
            ),
        )

    async def _process_photos(self, event_id: UUID) -> ProcessingSummary | None:
        try:
            return await self.processing_service.process_event(event_id)
        except RecognitionUnavailableError as exc:
            logger.warning(
                "Face API unavailable; photos left for a later run",
                extra={"event_id": str(event_id), "error": str(exc)},
            )
            return None

    def _check_photo_counts(self, event_id: UUID) -> None:
        # Photo counts are a consistency signal only; completion is decided
        # by assignments.
        total = self.photo_repository.count_photos(event_id)
        processed = self.photo_repository.count_photos(event_id, processed=True)
        if processed < total:
            logger.warning(
                "Event completed with unprocessed photos",
                extra={
                    "event_id": str(event_id),
                    "total": total,
                    "processed": processed,
                },
            )
