"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import ClientOptions, create_client

from eventface.adapters.face_api_client import HttpxFaceApiClient
from eventface.adapters.supabase_assignment_repository import (
    SupabaseAssignmentRepository,
)
from eventface.adapters.supabase_blob_store import SupabaseBlobStore
from eventface.adapters.supabase_event_repository import SupabaseEventRepository
from eventface.adapters.supabase_photo_repository import SupabasePhotoRepository
from eventface.config import Settings, normalize_base_url
from eventface.errors import ConfigurationError
from eventface.services.assignments import AssignmentService
from eventface.services.events import EventService
from eventface.services.lifecycle import LifecycleService
from eventface.services.processing import ProcessingService
from eventface.services.retention import RetentionService
from eventface.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    event_service: EventService
    assignment_service: AssignmentService
    upload_service: UploadService
    lifecycle_service: LifecycleService
    processing_service: ProcessingService
    retention_service: RetentionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    _require_credentials(resolved_settings)
    supabase_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_service_key,
        options=ClientOptions(
            storage_client_timeout=resolved_settings.upload_timeout_seconds
        ),
    )
    event_repository = SupabaseEventRepository(supabase_client)
    assignment_repository = SupabaseAssignmentRepository(supabase_client)
    photo_repository = SupabasePhotoRepository(supabase_client)
    blob_store = SupabaseBlobStore(supabase_client, resolved_settings.photo_bucket)
    face_client = HttpxFaceApiClient.create(
        base_url=normalize_base_url(resolved_settings.face_api_url),
        timeout=resolved_settings.face_api_timeout_seconds,
    )

    event_service = EventService(event_repository)
    assignment_service = AssignmentService(assignment_repository)
    processing_service = ProcessingService(
        face_client=face_client,
        photo_repository=photo_repository,
        delay_seconds=resolved_settings.processing_delay_seconds,
    )
    retention_service = RetentionService(
        photo_repository=photo_repository,
        event_service=event_service,
        blob_store=blob_store,
        retention_days=resolved_settings.retention_days,
    )
    lifecycle_service = LifecycleService(
        event_service=event_service,
        assignment_repository=assignment_repository,
        photo_repository=photo_repository,
        processing_service=processing_service,
        retention_service=retention_service,
    )
    upload_service = UploadService(
        photo_repository=photo_repository,
        assignment_repository=assignment_repository,
        blob_store=blob_store,
        lifecycle_service=lifecycle_service,
        max_upload_bytes=resolved_settings.max_upload_bytes,
        max_files_per_batch=resolved_settings.max_files_per_batch,
    )

    async def close_resources() -> None:
        await face_client.close()

    return AppContainer(
        settings=resolved_settings,
        event_service=event_service,
        assignment_service=assignment_service,
        upload_service=upload_service,
        lifecycle_service=lifecycle_service,
        processing_service=processing_service,
        retention_service=retention_service,
        close_resources=close_resources,
    )


def _require_credentials(settings: Settings) -> None:
    missing = [
        name
        for name in ("supabase_url", "supabase_service_key", "admin_token")
        if not getattr(settings, name).strip()
    ]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
