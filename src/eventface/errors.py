"""Error taxonomy for upload coordination."""

from uuid import UUID


class CoordinatorError(Exception):
    """Base class for coordinator errors."""


class ValidationError(CoordinatorError):
    """A file or batch was rejected before anything was stored."""


class StorageError(CoordinatorError):
    """A blob or row write did not succeed."""


class ExternalServiceError(CoordinatorError):
    """The face recognition service failed or timed out for one photo."""


class StateConflictError(CoordinatorError):
    """An event is no longer in a state the transition accepts."""

    def __init__(self, event_id: UUID, status: str | None) -> None:
        super().__init__(f"Event {event_id} cannot transition from {status}")
        self.event_id = event_id
        self.status = status


class EventNotFoundError(CoordinatorError):
    """The referenced event does not exist."""

    def __init__(self, event_id: UUID) -> None:
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class ConfigurationError(CoordinatorError):
    """Required configuration is missing or blank."""


class RecognitionUnavailableError(CoordinatorError):
    """The face recognition service is unreachable or has no model loaded."""
