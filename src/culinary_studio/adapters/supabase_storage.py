"""Supabase Storage implementation of file storage."""

from dataclasses import dataclass

from supabase import Client

from culinary_studio.services.storage import FileStorage


@dataclass
class SupabaseFileStorage(FileStorage):
    """Uploads into one public bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        self.client.storage.from_(self.bucket).upload(
            path, content, {"content-type": content_type}
        )

    def public_url(self, path: str) -> str:
        return self.client.storage.from_(self.bucket).get_public_url(path)
