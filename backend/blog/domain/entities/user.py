"""Domain entity for the signed-in user and their session."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Roles a blog user can hold."""

    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Unknown or missing role values degrade to a plain user."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER


@dataclass
class SessionUser:
    """The authenticated identity plus the profile fields the UI shows.

    ``role``, ``name``, ``username`` and ``profile_pic`` are resolved from the
    persisted ``users`` row first, then from identity-provider metadata.
    """

    id: str
    email: str
    name: str = ""
    username: str = ""
    role: Role = Role.USER
    profile_pic: str | None = None
    access_token: str | None = field(default=None, repr=False)
    refresh_token: str | None = field(default=None, repr=False)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def resolve(
        cls,
        identity: dict[str, Any],
        record: dict[str, Any] | None = None,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ) -> "SessionUser":
        """Merge an identity-provider user with its optional ``users`` row."""
        metadata = identity.get("user_metadata") or {}
        email = identity.get("email") or ""
        local_part = email.split("@")[0] if email else ""
        record = record or {}

        return cls(
            id=str(identity["id"]),
            email=email,
            name=record.get("name") or metadata.get("name") or local_part,
            username=record.get("username") or metadata.get("username") or local_part,
            role=Role.parse(record.get("role") or metadata.get("role")),
            profile_pic=record.get("profile_pic") or metadata.get("profilePic"),
            access_token=access_token,
            refresh_token=refresh_token,
        )


@dataclass
class AuthResult:
    """Outcome of a login or registration attempt.

    Exactly one of ``user`` / ``error`` is meaningful; registration that
    awaits email confirmation succeeds with neither set.
    """

    user: SessionUser | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
