"""Models for the face recognition service responses."""

from pydantic import BaseModel


class FaceApiHealth(BaseModel):
    """Health payload reported by the face recognition service."""

    status: str
    model_loaded: bool = False

    @property
    def ready(self) -> bool:
        """Return true when the service can process photos."""
        return self.status == "healthy" and self.model_loaded
