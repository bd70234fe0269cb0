"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import BaseModel

from eventface.api.serializers import (
    serialize_assignment,
    serialize_outcome,
    serialize_sweep,
)
from eventface.domain.events import EventStatus

if TYPE_CHECKING:
    from eventface.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


class StatusOverride(BaseModel):
    """Manual event status change."""

    status: EventStatus


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/events/{event_id}/photographers", dependencies=[Depends(require_admin)])
async def list_photographers(event_id: UUID, request: Request) -> dict[str, object]:
    """Return the photographers assigned to an event."""
    container: AppContainer = request.app.state.container
    container.event_service.get_event(event_id)
    assignments = container.assignment_service.list_for_event(event_id)
    return {"photographers": [serialize_assignment(row) for row in assignments]}


@router.post(
    "/events/{event_id}/photographers/{photographer_id}",
    dependencies=[Depends(require_admin)],
)
async def assign_photographer(
    event_id: UUID, photographer_id: UUID, request: Request
) -> dict[str, object]:
    """Assign a photographer to an event."""
    container: AppContainer = request.app.state.container
    container.event_service.get_event(event_id)
    assignment = container.assignment_service.assign(event_id, photographer_id)
    return serialize_assignment(assignment)


@router.delete(
    "/events/{event_id}/photographers/{photographer_id}",
    dependencies=[Depends(require_admin)],
)
async def remove_photographer(
    event_id: UUID, photographer_id: UUID, request: Request
) -> dict[str, object]:
    """Remove a photographer; the event is re-evaluated afterwards."""
    container: AppContainer = request.app.state.container
    container.event_service.get_event(event_id)
    container.assignment_service.remove(event_id, photographer_id)
    outcome = await container.lifecycle_service.evaluate(event_id)
    return serialize_outcome(outcome)


@router.put("/events/{event_id}/status", dependencies=[Depends(require_admin)])
async def override_status(
    event_id: UUID, body: StatusOverride, request: Request
) -> dict[str, object]:
    """Manually set an event status, including archived."""
    container: AppContainer = request.app.state.container
    event = container.event_service.override_status(event_id, body.status)
    return {"event_id": str(event.id), "status": event.status.value}


@router.post("/events/{event_id}/process", dependencies=[Depends(require_admin)])
async def process_event(event_id: UUID, request: Request) -> dict[str, object]:
    """Retry face recognition for the unprocessed photos of an event."""
    container: AppContainer = request.app.state.container
    outcome = await container.lifecycle_service.reprocess(event_id)
    return serialize_outcome(outcome)


@router.post("/retention/sweep", dependencies=[Depends(require_admin)])
async def retention_sweep(request: Request) -> dict[str, object]:
    """Delete photos whose retention window has passed."""
    container: AppContainer = request.app.state.container
    return serialize_sweep(container.retention_service.sweep())
