"""Unit tests for login, registration, logout and role resolution."""

import pytest

from blog.application.interfaces import IdentityProvider, UserRepository
from blog.application.services import IdentitySessionManager
from blog.config import SETUP_INSTRUCTIONS
from blog.domain.entities import Role
from blog.domain.exceptions import BackendError, BackendErrorKind

IDENTITY = {
    "id": "u-1",
    "email": "reader@example.com",
    "user_metadata": {"name": "Reader", "username": "reader", "role": "user"},
}


class FakeIdentityProvider(IdentityProvider):
    def __init__(self, sign_in_error: BackendErrorKind | None = None, get_user_works: bool = True):
        self.sign_in_error = sign_in_error
        self.get_user_works = get_user_works
        self.signed_up: list[dict] = []
        self.signed_out: list[str] = []
        self.calls = 0

    async def sign_up(self, email, password, metadata, redirect_to=None):
        self.calls += 1
        self.signed_up.append({"email": email, "metadata": metadata, "redirect_to": redirect_to})
        return {
            "user": {"id": "u-new", "email": email, "user_metadata": metadata},
            "access_token": "signup-tok",
        }

    async def sign_in(self, email, password):
        self.calls += 1
        if self.sign_in_error:
            raise BackendError(self.sign_in_error, "Invalid login credentials")
        return {"access_token": "tok", "refresh_token": "ref", "user": IDENTITY}

    async def sign_out(self, access_token):
        self.signed_out.append(access_token)
        raise BackendError(BackendErrorKind.UNREACHABLE, "network down")

    async def get_user(self, access_token):
        return IDENTITY if self.get_user_works and access_token == "tok" else None

    async def update_user(self, access_token, metadata):
        return IDENTITY

    async def update_user_by_id(self, user_id, metadata):
        return IDENTITY


class FakeUserRepository(UserRepository):
    def __init__(self, record: dict | None = None, fails: bool = False):
        self.record = record
        self.fails = fails
        self.updates: list[tuple[str, dict]] = []
        self.tokens: list[str | None] = []

    async def get(self, user_id, access_token=None):
        self.tokens.append(access_token)
        if self.fails:
            raise BackendError(BackendErrorKind.RELATION_NOT_FOUND, "relation users does not exist")
        return self.record

    async def update(self, user_id, fields, access_token=None):
        if self.fails:
            raise BackendError(BackendErrorKind.PERMISSION_DENIED, "rls")
        self.updates.append((user_id, fields))
        self.tokens.append(access_token)


@pytest.mark.asyncio
async def test_login_resolves_role_from_users_row():
    users = FakeUserRepository({"role": "admin", "name": "Row Name", "username": "row", "profile_pic": None})
    manager = IdentitySessionManager(FakeIdentityProvider(), users)

    result = await manager.login("reader@example.com", "secret")

    assert result.ok
    assert result.user.role is Role.ADMIN
    assert result.user.name == "Row Name"
    assert manager.is_admin
    assert users.tokens == ["tok"]


@pytest.mark.asyncio
async def test_login_degrades_to_metadata_when_users_row_unavailable():
    manager = IdentitySessionManager(FakeIdentityProvider(), FakeUserRepository(fails=True))

    result = await manager.login("reader@example.com", "secret")

    assert result.ok
    assert result.user.role is Role.USER
    assert result.user.username == "reader"


@pytest.mark.asyncio
async def test_login_uses_session_user_when_get_user_fails():
    manager = IdentitySessionManager(FakeIdentityProvider(get_user_works=False), FakeUserRepository())
    result = await manager.login("reader@example.com", "secret")
    assert result.ok
    assert result.user.id == "u-1"
    assert result.user.access_token == "tok"


@pytest.mark.asyncio
async def test_invalid_credentials_message():
    manager = IdentitySessionManager(
        FakeIdentityProvider(sign_in_error=BackendErrorKind.INVALID_CREDENTIALS), FakeUserRepository()
    )
    result = await manager.login("reader@example.com", "wrong")
    assert result.error == "Invalid email or password."
    assert not manager.is_authenticated


@pytest.mark.asyncio
async def test_unconfigured_login_makes_no_network_call():
    identity = FakeIdentityProvider()
    manager = IdentitySessionManager(identity, FakeUserRepository(), configured=False)

    login = await manager.login("reader@example.com", "secret")
    register = await manager.register("a@b.co", "secret", "A", "a")

    assert login.error == SETUP_INSTRUCTIONS
    assert register.error == SETUP_INSTRUCTIONS
    assert identity.calls == 0


@pytest.mark.asyncio
async def test_register_sends_metadata_and_redirect():
    identity = FakeIdentityProvider()
    users = FakeUserRepository()
    manager = IdentitySessionManager(identity, users, site_url="https://blog.example.com/")

    result = await manager.register("new@example.com", "secret", "New", "newbie")

    assert result.ok
    assert identity.signed_up[0]["metadata"] == {"name": "New", "username": "newbie", "role": "user"}
    assert identity.signed_up[0]["redirect_to"] == "https://blog.example.com/login"
    assert users.updates == [("u-new", {"role": "user"})]
    assert users.tokens == ["signup-tok"]


@pytest.mark.asyncio
async def test_register_tolerates_role_update_failure():
    manager = IdentitySessionManager(FakeIdentityProvider(), FakeUserRepository(fails=True))
    assert (await manager.register("new@example.com", "secret", "New", "newbie")).ok


@pytest.mark.asyncio
async def test_logout_clears_session_even_when_remote_fails():
    identity = FakeIdentityProvider()
    manager = IdentitySessionManager(identity, FakeUserRepository())
    await manager.login("reader@example.com", "secret")

    await manager.logout()

    assert identity.signed_out == ["tok"]
    assert manager.current_user is None
    assert not manager.is_authenticated


@pytest.mark.asyncio
async def test_restore_and_fetch_current_user():
    manager = IdentitySessionManager(FakeIdentityProvider(), FakeUserRepository())

    manager.restore("tok")
    user = await manager.fetch_current_user()
    assert user is not None and user.email == "reader@example.com"

    manager.restore("expired")
    assert await manager.fetch_current_user() is None
    assert manager.current_user is None
