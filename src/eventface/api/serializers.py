"""JSON shapes returned by the HTTP API."""

from eventface.domain.assignments import PhotographerAssignment
from eventface.services.lifecycle import EventStatusView, LifecycleOutcome
from eventface.services.processing import ProcessingSummary
from eventface.services.retention import SweepResult
from eventface.services.uploads import UploadBatchResult


def serialize_batch(result: UploadBatchResult) -> dict[str, object]:
    return {
        "uploaded": result.uploaded,
        "failed": result.failed,
        "total": result.total,
        "photo_ids": [str(photo_id) for photo_id in result.photo_ids],
        "failures": result.failures,
        "message": result.message,
    }


def serialize_processing(summary: ProcessingSummary | None) -> dict[str, object] | None:
    if summary is None:
        return None
    return {
        "total": summary.total,
        "processed": summary.processed,
        "failures": summary.failures,
        "message": summary.message,
    }


def serialize_outcome(outcome: LifecycleOutcome) -> dict[str, object]:
    return {
        "event_id": str(outcome.event_id),
        "status": outcome.status.value,
        "completed_now": outcome.completed_now,
        "photographers_assigned": outcome.completion.assigned,
        "photographers_done": outcome.completion.done,
        "processing": serialize_processing(outcome.processing),
        "scheduled_for_deletion": outcome.scheduled_for_deletion,
    }


def serialize_status(view: EventStatusView) -> dict[str, object]:
    return {
        "event_id": str(view.event.id),
        "code": view.event.code,
        "name": view.event.name,
        "date": view.event.date.isoformat(),
        "status": view.event.status.value,
        "projected_status": view.projected_status.value,
        "uploads_complete": view.completion.complete,
        "photographers_assigned": view.completion.assigned,
        "photographers_done": view.completion.done,
        "total_photos": view.total_photos,
        "processed_photos": view.processed_photos,
    }


def serialize_assignment(assignment: PhotographerAssignment) -> dict[str, object]:
    return {
        "event_id": str(assignment.event_id),
        "photographer_id": str(assignment.photographer_id),
        "uploads_complete": assignment.uploads_complete,
        "last_upload_at": assignment.last_upload_at.isoformat()
        if assignment.last_upload_at
        else None,
    }


def serialize_sweep(result: SweepResult) -> dict[str, object]:
    return {"deleted_count": result.deleted_count, "errors": result.errors}
