"""Identity session manager — login, registration, logout and the current user."""

import logging

from blog.application.interfaces import IdentityProvider, UserRepository
from blog.application.services.error_messages import login_error_message, register_error_message
from blog.config import SETUP_INSTRUCTIONS
from blog.domain.entities import AuthResult, Role, SessionUser
from blog.domain.exceptions import BackendError

logger = logging.getLogger(__name__)


class IdentitySessionManager:
    """Holds the current session and resolves the user's role.

    The session is replaced wholesale on login, restore and logout; there is
    no field-level mutation from concurrent callers. The role comes from the
    persisted ``users`` row, falling back to identity metadata and finally to
    ``Role.USER``; failing to resolve it never fails a login.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        users: UserRepository,
        *,
        configured: bool = True,
        site_url: str = "",
    ):
        self._identity = identity
        self._users = users
        self._configured = configured
        self._site_url = site_url.rstrip("/")
        self._access_token: str | None = None
        self._refresh_token: str | None = None
        self._current_user: SessionUser | None = None

    @property
    def current_user(self) -> SessionUser | None:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    @property
    def is_admin(self) -> bool:
        return self._current_user is not None and self._current_user.role is Role.ADMIN

    def restore(self, access_token: str | None, refresh_token: str | None = None) -> None:
        """Adopt an existing session token; call ``fetch_current_user`` to load it."""
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._current_user = None

    async def fetch_current_user(self) -> SessionUser | None:
        """Load the signed-in user (with role) for the current token."""
        if not self._access_token:
            self._current_user = None
            return None

        try:
            identity = await self._identity.get_user(self._access_token)
        except BackendError as exc:
            logger.warning("Could not fetch current user: %s", exc)
            identity = None

        if identity is None:
            self._current_user = None
            return None

        record = await self._load_user_record(str(identity["id"]))
        self._current_user = SessionUser.resolve(
            identity,
            record,
            access_token=self._access_token,
            refresh_token=self._refresh_token,
        )
        logger.debug("User %s fetched with role %s", self._current_user.id, self._current_user.role.value)
        return self._current_user

    async def login(self, email: str, password: str) -> AuthResult:
        if not self._configured:
            return AuthResult(error=SETUP_INSTRUCTIONS)

        try:
            session = await self._identity.sign_in(email, password)
        except BackendError as exc:
            logger.warning("Login failed for %s: %s", email, exc)
            return AuthResult(error=login_error_message(exc))

        self._access_token = session.get("access_token")
        self._refresh_token = session.get("refresh_token")

        user = await self.fetch_current_user()
        if user is None and session.get("user"):
            # Sign-in succeeded; degrade to the identity embedded in the session.
            record = await self._load_user_record(str(session["user"]["id"]))
            user = SessionUser.resolve(
                session["user"],
                record,
                access_token=self._access_token,
                refresh_token=self._refresh_token,
            )
            self._current_user = user

        if user is None:
            return AuthResult(error="Login failed")
        logger.info("User %s logged in as %s", user.id, user.role.value)
        return AuthResult(user=user)

    async def register(self, email: str, password: str, name: str, username: str) -> AuthResult:
        if not self._configured:
            return AuthResult(error=SETUP_INSTRUCTIONS)

        metadata = {"name": name, "username": username, "role": Role.USER.value}
        redirect_to = f"{self._site_url}/login" if self._site_url else None
        try:
            signup = await self._identity.sign_up(email, password, metadata, redirect_to=redirect_to)
        except BackendError as exc:
            logger.warning("Registration failed for %s: %s", email, exc)
            return AuthResult(error=register_error_message(exc))

        # No user object means email confirmation is pending.
        if signup and signup.get("user"):
            try:
                await self._users.update(
                    str(signup["user"]["id"]),
                    {"role": Role.USER.value},
                    access_token=signup.get("access_token"),
                )
            except BackendError as exc:
                logger.warning("Could not update user role in users table: %s", exc)

        return AuthResult()

    async def logout(self) -> None:
        """Sign out remotely; the local session is cleared even if that fails."""
        token = self._access_token
        try:
            if token:
                await self._identity.sign_out(token)
        except BackendError as exc:
            logger.warning("Logout error: %s", exc)
        finally:
            self._access_token = None
            self._refresh_token = None
            self._current_user = None

    async def _load_user_record(self, user_id: str) -> dict | None:
        try:
            return await self._users.get(user_id, access_token=self._access_token)
        except BackendError as exc:
            logger.warning(
                "Could not fetch users row for %s, using identity metadata: %s", user_id, exc
            )
            return None
