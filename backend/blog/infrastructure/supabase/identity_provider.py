"""Supabase Auth (GoTrue) client — implements the IdentityProvider interface."""

import logging
from typing import Any

from blog.application.interfaces import IdentityProvider
from blog.domain.exceptions import BackendError
from blog.infrastructure.supabase.client import SupabaseClient

logger = logging.getLogger(__name__)

_INVALID_TOKEN_STATUSES = frozenset({401, 403})


class SupabaseIdentityProvider(IdentityProvider):
    """Infrastructure adapter for ``/auth/v1``.

    ``update_user_by_id`` hits the admin API and only works when the client
    carries the service-role key.
    """

    def __init__(self, client: SupabaseClient):
        self._client = client

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        redirect_to: str | None = None,
    ) -> dict[str, Any] | None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        response = await self._client.request(
            "POST",
            "/auth/v1/signup",
            params=params,
            json={"email": email, "password": password, "data": metadata},
        )
        data = response.json()
        # With auto-confirm the body is a session; otherwise the bare user.
        if "access_token" in data:
            return {"user": data.get("user"), "access_token": data["access_token"]}
        return {"user": data, "access_token": None} if data.get("id") else None

    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        response = await self._client.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return response.json()

    async def sign_out(self, access_token: str) -> None:
        await self._client.request("POST", "/auth/v1/logout", bearer=access_token)

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        try:
            response = await self._client.request("GET", "/auth/v1/user", bearer=access_token)
        except BackendError as exc:
            if exc.status_code in _INVALID_TOKEN_STATUSES:
                logger.debug("Access token rejected: %s", exc.message)
                return None
            raise
        return response.json()

    async def update_user(self, access_token: str, metadata: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.request(
            "PUT", "/auth/v1/user", json={"data": metadata}, bearer=access_token
        )
        return response.json()

    async def update_user_by_id(self, user_id: str, metadata: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.request(
            "PUT", f"/auth/v1/admin/users/{user_id}", json={"user_metadata": metadata}
        )
        return response.json()
