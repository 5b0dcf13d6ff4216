"""Supabase Storage client — implements the BlobStore interface."""

from urllib.parse import quote

from blog.application.interfaces import BlobStore
from blog.infrastructure.supabase.client import SupabaseClient


class SupabaseBlobStore(BlobStore):
    """Infrastructure adapter for ``/storage/v1``."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    async def list_buckets(self) -> list[str]:
        response = await self._client.request("GET", "/storage/v1/bucket")
        return [bucket["name"] for bucket in response.json()]

    async def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> None:
        await self._client.request(
            "POST",
            f"/storage/v1/object/{bucket}/{quote(path)}",
            content=content,
            headers={
                "Content-Type": content_type,
                "Cache-Control": "max-age=3600",
                "x-upsert": "false",
            },
        )

    async def remove(self, bucket: str, paths: list[str]) -> None:
        await self._client.request(
            "DELETE", f"/storage/v1/object/{bucket}", json={"prefixes": paths}
        )

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._client.url}/storage/v1/object/public/{bucket}/{quote(path)}"
