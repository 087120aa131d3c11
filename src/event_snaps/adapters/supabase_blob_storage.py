"""Supabase Storage adapter for photo files."""

from dataclasses import dataclass

from supabase import Client

from event_snaps.adapters.supabase_errors import storage_errors
from event_snaps.services.photos import BlobStorage


@dataclass
class SupabaseBlobStorage(BlobStorage):
    """Stores image bytes in a Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload bytes and return the object's public URL."""
        bucket = self.client.storage.from_(self.bucket)
        with storage_errors("Uploading photo"):
            bucket.upload(path, content, {"content-type": content_type})
        return bucket.get_public_url(path)

    def remove(self, path: str) -> None:
        """Delete an object from the bucket."""
        with storage_errors("Removing photo file"):
            self.client.storage.from_(self.bucket).remove([path])
