"""Application service for profile and article image uploads.

Storage layout:
    <avatars bucket>/profile-pictures/<epoch_ms>-<random>.<ext>
    <thumbnails bucket>/thumbnail-pictures/<epoch_ms>-<random>.<ext>
"""

import logging
import mimetypes
import secrets
import string
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar
from urllib.parse import urlparse

from blog.application.interfaces import BlobStore
from blog.application.services.error_messages import upload_error_message
from blog.domain.entities import ImageFile, UploadResult
from blog.domain.exceptions import BackendError, BackendErrorKind, ImageValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
ALLOWED_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})
DEFAULT_MAX_UPLOAD_SIZE = 5 * 1024 * 1024

PROFILE_PICTURE_PREFIX = "profile-pictures"
ARTICLE_IMAGE_PREFIX = "thumbnail-pictures"

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase


def generate_object_name(file: ImageFile) -> str:
    """Collision-resistant name: ``<epoch_ms>-<11 base36 chars>.<ext>``."""
    extension = file.extension or (mimetypes.guess_extension(file.mime_type) or ".bin").lstrip(".")
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(11))
    return f"{int(time.time() * 1000)}-{suffix}.{extension}"


def object_name_from_url(url: str) -> str:
    """Last path segment of a public object URL."""
    return urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]


class MediaService:
    """Uploads images to the blob store, retrying with the elevated credential
    when a storage policy refuses the caller's."""

    def __init__(
        self,
        blob_store: BlobStore,
        elevated_blob_store: BlobStore | None = None,
        avatars_bucket: str = "avatars",
        thumbnails_bucket: str = "thumbnails",
        max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE,
    ):
        self._blob_store = blob_store
        self._elevated_blob_store = elevated_blob_store
        self._avatars_bucket = avatars_bucket
        self._thumbnails_bucket = thumbnails_bucket
        self._max_upload_size = max_upload_size

    def validate_image(self, file: ImageFile) -> None:
        """Reject unsupported types and oversized files before any network call."""
        # A missing extension is named from the MIME type on upload.
        if file.mime_type not in ALLOWED_IMAGE_TYPES or (
            file.extension and file.extension not in ALLOWED_IMAGE_EXTENSIONS
        ):
            raise ImageValidationError(
                "Invalid file type. Please upload a valid image file (JPEG, PNG, GIF, WebP)."
            )
        if file.size > self._max_upload_size:
            limit_mb = self._max_upload_size // (1024 * 1024)
            raise ImageValidationError(
                f"File too large. Please upload an image smaller than {limit_mb}MB."
            )

    async def upload_profile_picture(
        self, file: ImageFile, previous_image: str | None = None
    ) -> UploadResult:
        self.validate_image(file)
        if previous_image:
            await self.delete_profile_picture(previous_image)
        return await self._upload(self._avatars_bucket, PROFILE_PICTURE_PREFIX, file)

    async def upload_article_image(self, file: ImageFile) -> UploadResult:
        self.validate_image(file)
        return await self._upload(self._thumbnails_bucket, ARTICLE_IMAGE_PREFIX, file)

    async def delete_profile_picture(self, image_url: str) -> bool:
        """Best-effort removal of a previous profile picture. Never raises."""
        path = f"{PROFILE_PICTURE_PREFIX}/{object_name_from_url(image_url)}"
        try:
            await self._with_elevated_retry(
                lambda store: store.remove(self._avatars_bucket, [path])
            )
        except BackendError as exc:
            logger.warning("Failed to delete old profile picture %s: %s", path, exc.message)
            return False
        logger.info("Deleted old profile picture %s", path)
        return True

    async def bucket_exists(self, bucket: str) -> bool:
        # Listing buckets is usually refused to the anon key.
        store = self._elevated_blob_store or self._blob_store
        try:
            return bucket in await store.list_buckets()
        except BackendError as exc:
            logger.warning("Could not list storage buckets: %s", exc.message)
            return False

    async def _upload(self, bucket: str, prefix: str, file: ImageFile) -> UploadResult:
        path = f"{prefix}/{generate_object_name(file)}"
        try:
            await self._with_elevated_retry(
                lambda store: store.upload(bucket, path, file.content, file.mime_type)
            )
        except BackendError as exc:
            logger.error("Upload to %s/%s failed: %s", bucket, path, exc)
            return UploadResult(success=False, error=upload_error_message(exc, bucket))

        logger.info("Uploaded %s (%d bytes) to %s/%s", file.filename, file.size, bucket, path)
        return UploadResult(
            success=True,
            url=self._blob_store.public_url(bucket, path),
            path=path,
        )

    async def _with_elevated_retry(self, operation: Callable[[BlobStore], Awaitable[T]]) -> T:
        """Run ``operation`` once, and once more elevated if a policy denied it."""
        try:
            return await operation(self._blob_store)
        except BackendError as exc:
            if exc.kind is not BackendErrorKind.PERMISSION_DENIED or self._elevated_blob_store is None:
                raise
            logger.info("Storage policy denied the request, retrying with service role")
            return await operation(self._elevated_blob_store)
