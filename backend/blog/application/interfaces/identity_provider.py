"""Ports for authentication and the persisted user record."""

from abc import ABC, abstractmethod
from typing import Any


class IdentityProvider(ABC):
    """Port for the hosted authentication service.

    Users and sessions cross this boundary as the provider's own JSON
    objects (``id``, ``email``, ``user_metadata`` / ``access_token``,
    ``refresh_token``, ``user``).
    """

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        redirect_to: str | None = None,
    ) -> dict[str, Any] | None:
        """Register a user.

        Returns ``{"user": ..., "access_token": ...}``; the token is None unless
        the project auto-confirms sign-ups. Returns None while email
        confirmation is pending and no user is exposed.
        """
        ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """Password sign-in. Returns the session."""
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        ...

    @abstractmethod
    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Return the user owning the token, or None if the token is not valid."""
        ...

    @abstractmethod
    async def update_user(self, access_token: str, metadata: dict[str, Any]) -> dict[str, Any]:
        """Merge ``metadata`` into the signed-in user's metadata."""
        ...

    @abstractmethod
    async def update_user_by_id(self, user_id: str, metadata: dict[str, Any]) -> dict[str, Any]:
        """Admin variant of ``update_user``; needs the elevated credential."""
        ...


class UserRepository(ABC):
    """Port for the ``users`` table that mirrors identities with profile data."""

    @abstractmethod
    async def get(self, user_id: str, access_token: str | None = None) -> dict[str, Any] | None:
        """Return ``role``, ``name``, ``username``, ``profile_pic`` or None if missing.

        ``access_token`` makes the read as that user so row-level security applies.
        """
        ...

    @abstractmethod
    async def update(
        self, user_id: str, fields: dict[str, Any], access_token: str | None = None
    ) -> None:
        ...
