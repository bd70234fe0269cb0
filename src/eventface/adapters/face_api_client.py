"""Face recognition service client."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import httpx
from pydantic import ValidationError as PydanticValidationError

from eventface.domain.recognition import FaceApiHealth
from eventface.errors import ExternalServiceError


class FaceApiClient(Protocol):
    """Interface for face recognition service interactions."""

    async def check_health(self) -> FaceApiHealth:
        """Return the service health report."""

    async def process_photo(self, photo_id: UUID) -> dict[str, object]:
        """Ask the service to detect and recognize faces in a stored photo."""


@dataclass
class HttpxFaceApiClient(FaceApiClient):
    """HTTPX-backed face recognition client."""

    base_url: str
    timeout: float
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, timeout: float) -> "HttpxFaceApiClient":
        """Create a face API client with a managed httpx session."""
        return cls(base_url=base_url, timeout=timeout, http_client=httpx.AsyncClient())

    async def check_health(self) -> FaceApiHealth:
        """Fetch and validate the /health payload."""
        try:
            response = await self.http_client.get(
                f"{self.base_url}/health", timeout=self.timeout
            )
            response.raise_for_status()
            return FaceApiHealth.model_validate(response.json())
        except (httpx.HTTPError, ValueError, PydanticValidationError) as exc:
            raise ExternalServiceError(f"Health check failed: {exc}") from exc

    async def process_photo(self, photo_id: UUID) -> dict[str, object]:
        """Submit one photo for processing; timeouts count as failures."""
        try:
            response = await self.http_client.post(
                f"{self.base_url}/process-photo",
                data={"photo_id": str(photo_id)},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            raise ExternalServiceError(f"Timed out processing photo {photo_id}") from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Request failed: {exc}") from exc
        if response.is_error:
            raise ExternalServiceError(_error_message(response))
        try:
            return response.json()
        except ValueError:
            return {}

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Extract the service error text, falling back to the status code."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return response.text or f"HTTP error {response.status_code}"
