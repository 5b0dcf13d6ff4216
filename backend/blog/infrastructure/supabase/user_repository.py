"""Concrete ``users`` table repository backed by Supabase PostgREST."""

from typing import Any

from blog.application.interfaces import UserRepository
from blog.infrastructure.supabase.client import SupabaseClient, eq

USER_COLUMNS = "role,name,username,profile_pic"


class SupabaseUserRepository(UserRepository):
    def __init__(self, client: SupabaseClient):
        self._client = client

    def _as(self, access_token: str | None) -> SupabaseClient:
        return self._client.with_access_token(access_token) if access_token else self._client

    async def get(self, user_id: str, access_token: str | None = None) -> dict[str, Any] | None:
        params = {"select": USER_COLUMNS, "id": eq(user_id), "limit": 1}
        rows, _ = await self._as(access_token).select("users", params)
        return rows[0] if rows else None

    async def update(
        self, user_id: str, fields: dict[str, Any], access_token: str | None = None
    ) -> None:
        await self._as(access_token).update("users", {"id": eq(user_id)}, fields, select="id")
