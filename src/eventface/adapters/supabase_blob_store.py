"""Supabase storage adapter for photo files."""

from dataclasses import dataclass
from typing import Protocol

from supabase import Client


class BlobStore(Protocol):
    """Interface for binary photo storage."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under a key and return their public URL."""

    def remove(self, key: str) -> None:
        """Delete a stored object."""


@dataclass
class SupabaseBlobStore(BlobStore):
    """Supabase storage bucket implementation."""

    client: Client
    bucket: str

    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Upload bytes to the bucket and return the public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(key, data, file_options={"content-type": content_type})
        return bucket.get_public_url(key)

    def remove(self, key: str) -> None:
        """Remove an object from the bucket."""
        self.client.storage.from_(self.bucket).remove([key])


def storage_key_from_url(url: str) -> str:
    """Return the object key of a public bucket URL."""
    return url.split("?", maxsplit=1)[0].rstrip("/").rsplit("/", maxsplit=1)[-1]
