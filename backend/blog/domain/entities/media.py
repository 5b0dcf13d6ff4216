"""Domain entities for image uploads."""

import mimetypes
from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass
class ImageFile:
    """An image submitted for upload, held in memory."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        """Original extension without the dot, lower-cased."""
        return PurePosixPath(self.filename).suffix.lstrip(".").lower()

    @property
    def mime_type(self) -> str:
        """Declared content type, or a guess from the filename."""
        if self.content_type and self.content_type != "application/octet-stream":
            return self.content_type
        return mimetypes.guess_type(self.filename)[0] or "application/octet-stream"


@dataclass
class UploadResult:
    """Outcome of a blob upload: a public URL or a user-facing error."""

    success: bool
    url: str | None = None
    path: str | None = None
    error: str | None = None
