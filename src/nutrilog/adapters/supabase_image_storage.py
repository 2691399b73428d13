"""Supabase Storage adapter for meal images."""

from dataclasses import dataclass
from uuid import uuid4

from supabase import Client

from nutrilog.services.images import EXTENSIONS, ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Stores meal photos in a public Supabase Storage bucket."""

    client: Client
    bucket: str
    folder: str = "meals"

    def upload(self, image_bytes: bytes, content_type: str) -> str:
        """Upload the image under a random name and return its public URL."""
        extension = EXTENSIONS.get(content_type, "jpg")
        path = f"{self.folder}/{uuid4().hex}.{extension}"
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(path, image_bytes, {"content-type": content_type})
        return bucket.get_public_url(path)

    def delete(self, image_url: str) -> None:
        path = self.path_from_url(image_url)
        if path is None:
            return
        self.client.storage.from_(self.bucket).remove([path])

    def path_from_url(self, image_url: str) -> str | None:
        """Return the object path inside the bucket, or None for foreign URLs."""
        marker = f"/{self.bucket}/"
        if marker not in image_url:
            return None
        return image_url.split(marker, 1)[1].split("?", 1)[0] or None
