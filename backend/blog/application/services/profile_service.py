"""Application service for editing the signed-in user's profile."""

import dataclasses
import logging

from blog.application.interfaces import IdentityProvider, UserRepository
from blog.application.services.media_service import MediaService
from blog.domain.entities import ImageFile, SessionUser
from blog.domain.exceptions import BackendError, BackendErrorKind, ProfileUpdateError

logger = logging.getLogger(__name__)


class ProfileService:
    """Updates name, username and profile picture in identity metadata and the users row."""

    def __init__(
        self,
        identity: IdentityProvider,
        users: UserRepository,
        media: MediaService,
        admin_identity: IdentityProvider | None = None,
    ):
        self._identity = identity
        self._users = users
        self._media = media
        self._admin_identity = admin_identity

    async def update_profile(
        self,
        user: SessionUser,
        name: str,
        username: str,
        image: ImageFile | None = None,
    ) -> SessionUser:
        metadata: dict[str, str] = {"name": name, "username": username}
        profile_pic = user.profile_pic

        if image is not None:
            result = await self._media.upload_profile_picture(image, user.profile_pic)
            if not result.success:
                raise ProfileUpdateError(result.error or "Image upload failed")
            profile_pic = result.url
            metadata["profilePic"] = profile_pic

        await self._update_metadata(user, metadata)

        record = {"name": name, "username": username}
        if image is not None:
            record["profile_pic"] = profile_pic
        try:
            await self._users.update(user.id, record, access_token=user.access_token)
        except BackendError as exc:
            logger.warning("Profile metadata saved but users row update failed for %s: %s", user.id, exc)

        logger.info("Updated profile of user %s", user.id)
        return dataclasses.replace(user, name=name, username=username, profile_pic=profile_pic)

    async def _update_metadata(self, user: SessionUser, metadata: dict[str, str]) -> None:
        try:
            await self._identity.update_user(user.access_token or "", metadata)
            return
        except BackendError as exc:
            if exc.kind is not BackendErrorKind.PERMISSION_DENIED or self._admin_identity is None:
                raise ProfileUpdateError(f"Failed to update profile: {exc.message}") from exc
            logger.info("Row-level security refused the metadata update, retrying with service role")

        try:
            await self._admin_identity.update_user_by_id(user.id, metadata)
        except BackendError as exc:
            raise ProfileUpdateError(f"Failed to update profile: {exc.message}") from exc
