"""Unit tests for profile editing."""

import pytest

from blog.application.interfaces import BlobStore, IdentityProvider, UserRepository
from blog.application.services import MediaService, ProfileService
from blog.domain.entities import ImageFile, SessionUser
from blog.domain.exceptions import BackendError, BackendErrorKind, ProfileUpdateError


class FakeBlobStore(BlobStore):
    def __init__(self, fail_with: BackendErrorKind | None = None):
        self.fail_with = fail_with

    async def list_buckets(self):
        return ["avatars"]

    async def upload(self, bucket, path, content, content_type):
        if self.fail_with:
            raise BackendError(self.fail_with, "storage said no")

    async def remove(self, bucket, paths):
        return None

    def public_url(self, bucket, path):
        return f"https://example.supabase.co/storage/v1/object/public/{bucket}/{path}"


class RecordingIdentity(IdentityProvider):
    def __init__(self, deny: bool = False):
        self.deny = deny
        self.updates: list[tuple[str, dict]] = []

    async def sign_up(self, email, password, metadata, redirect_to=None):
        raise NotImplementedError

    async def sign_in(self, email, password):
        raise NotImplementedError

    async def sign_out(self, access_token):
        raise NotImplementedError

    async def get_user(self, access_token):
        raise NotImplementedError

    async def update_user(self, access_token, metadata):
        if self.deny:
            raise BackendError(BackendErrorKind.PERMISSION_DENIED, "row-level security policy")
        self.updates.append((access_token, metadata))
        return {}

    async def update_user_by_id(self, user_id, metadata):
        self.updates.append((user_id, metadata))
        return {}


class RecordingUsers(UserRepository):
    def __init__(self, fails: bool = False):
        self.fails = fails
        self.updates: list[tuple[str, dict, str | None]] = []

    async def get(self, user_id, access_token=None):
        return None

    async def update(self, user_id, fields, access_token=None):
        if self.fails:
            raise BackendError(BackendErrorKind.PERMISSION_DENIED, "rls")
        self.updates.append((user_id, fields, access_token))


USER = SessionUser(id="u-1", email="r@example.com", name="Old", username="old", access_token="tok")


@pytest.mark.asyncio
async def test_update_name_without_image():
    identity, users = RecordingIdentity(), RecordingUsers()
    service = ProfileService(identity, users, MediaService(FakeBlobStore()))

    updated = await service.update_profile(USER, "New", "newname")

    assert updated.name == "New" and updated.username == "newname"
    assert identity.updates == [("tok", {"name": "New", "username": "newname"})]
    assert users.updates == [("u-1", {"name": "New", "username": "newname"}, "tok")]


@pytest.mark.asyncio
async def test_update_with_image_sets_profile_pic():
    identity, users = RecordingIdentity(), RecordingUsers()
    service = ProfileService(identity, users, MediaService(FakeBlobStore()))
    image = ImageFile(filename="me.png", content=b"png", content_type="image/png")

    updated = await service.update_profile(USER, "New", "newname", image)

    assert updated.profile_pic.startswith("https://example.supabase.co/storage/v1/object/public/avatars/")
    assert identity.updates[0][1]["profilePic"] == updated.profile_pic
    assert users.updates[0][1]["profile_pic"] == updated.profile_pic


@pytest.mark.asyncio
async def test_upload_failure_raises_profile_update_error():
    service = ProfileService(
        RecordingIdentity(),
        RecordingUsers(),
        MediaService(FakeBlobStore(fail_with=BackendErrorKind.BUCKET_NOT_FOUND)),
    )
    image = ImageFile(filename="me.png", content=b"png", content_type="image/png")
    with pytest.raises(ProfileUpdateError, match="bucket does not exist"):
        await service.update_profile(USER, "New", "newname", image)


@pytest.mark.asyncio
async def test_permission_denied_retries_through_admin():
    admin = RecordingIdentity()
    service = ProfileService(
        RecordingIdentity(deny=True), RecordingUsers(), MediaService(FakeBlobStore()), admin_identity=admin
    )

    await service.update_profile(USER, "New", "newname")

    assert admin.updates == [("u-1", {"name": "New", "username": "newname"})]


@pytest.mark.asyncio
async def test_permission_denied_without_admin_fails():
    service = ProfileService(RecordingIdentity(deny=True), RecordingUsers(), MediaService(FakeBlobStore()))
    with pytest.raises(ProfileUpdateError):
        await service.update_profile(USER, "New", "newname")


@pytest.mark.asyncio
async def test_users_row_failure_is_tolerated():
    service = ProfileService(RecordingIdentity(), RecordingUsers(fails=True), MediaService(FakeBlobStore()))
    updated = await service.update_profile(USER, "New", "newname")
    assert updated.name == "New"
