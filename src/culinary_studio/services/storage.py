"""Object storage paths for uploaded images."""

from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Protocol

_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
}


class FileStorage(Protocol):
    """Upload-by-path object storage."""

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Store ``content`` at ``path``."""

    def public_url(self, path: str) -> str:
        """Return the public URL of a stored object."""


def content_type_for(filename: str) -> str:
    """Guess an image content type from the file extension."""
    extension = PurePosixPath(filename).suffix.lstrip(".").lower()
    return _CONTENT_TYPES.get(extension, "application/octet-stream")


def avatar_path(user_id: str, filename: str, now: datetime | None = None) -> str:
    """Return ``avatars/<user>/<unix seconds>.<ext>``."""
    moment = now or datetime.now(tz=UTC)
    extension = PurePosixPath(filename).suffix.lstrip(".").lower() or "jpg"
    return f"avatars/{user_id}/{int(moment.timestamp())}.{extension}"


def recipe_image_path(
    user_id: str, filename: str, now: datetime | None = None
) -> str:
    """Return ``avatars/<user>/<unix millis>_<filename>``."""
    moment = now or datetime.now(tz=UTC)
    name = PurePosixPath(filename).name or "image"
    return f"avatars/{user_id}/{int(moment.timestamp() * 1000)}_{name}"
