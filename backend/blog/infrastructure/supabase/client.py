"""Supabase HTTP client — one project, one credential.

Talks to the three Supabase services over plain HTTPS with httpx:

    /rest/v1     PostgREST (tables and remote procedures)
    /auth/v1     GoTrue (identity)
    /storage/v1  Storage (buckets and objects)

Every failure surfaces as a classified ``BackendError``; transport errors
become ``UNREACHABLE`` and unusable credentials ``NOT_CONFIGURED`` without
touching the network.
"""

import logging
import re
from datetime import datetime
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from blog.config import SETUP_INSTRUCTIONS
from blog.domain.exceptions import BackendError, BackendErrorKind
from blog.infrastructure.supabase.errors import error_from_response

logger = logging.getLogger(__name__)

# Supabase caps responses at 1000 rows unless configured otherwise.
PAGE_BATCH = 1000

_CONTENT_RANGE = re.compile(r"^(?:\d+-\d+|\*)/(\d+|\*)$")
_DATETIME = TypeAdapter(datetime)


def eq(value: Any) -> str:
    """PostgREST equality filter value."""
    return f"eq.{value}"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a PostgREST timestamp / ISO string; None when absent or malformed."""
    if value is None or value == "":
        return None
    try:
        return _DATETIME.validate_python(value)
    except ValidationError:
        logger.debug("Unparseable timestamp %r", value)
        return None


def parse_total(content_range: str | None) -> int | None:
    """Total row count from a ``Content-Range: 0-5/42`` header."""
    if not content_range:
        return None
    match = _CONTENT_RANGE.match(content_range.strip())
    if not match or match.group(1) == "*":
        return None
    return int(match.group(1))


class SupabaseClient:
    """Infrastructure adapter — authenticated access to a Supabase project.

    The ``api_key`` is the anon or the service-role key; ``access_token`` is
    an end-user JWT that, when present, is sent instead of the key so
    row-level security policies see the signed-in user.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        access_token: str | None = None,
        timeout: float = 30.0,
        configured: bool = True,
    ):
        self._url = url.rstrip("/")
        self._api_key = api_key
        self._http_client = http_client
        self._access_token = access_token
        self._timeout = timeout
        self._configured = configured

    @property
    def url(self) -> str:
        return self._url

    @property
    def configured(self) -> bool:
        return self._configured

    def with_access_token(self, access_token: str | None) -> "SupabaseClient":
        """Same project and connection pool, acting as the given user."""
        return SupabaseClient(
            self._url,
            self._api_key,
            http_client=self._http_client,
            access_token=access_token,
            timeout=self._timeout,
            configured=self._configured,
        )

    def _get_headers(self, bearer: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {bearer or self._access_token or self._api_key}",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        bearer: str | None = None,
    ) -> httpx.Response:
        """Send one request; raise ``BackendError`` on any failure."""
        if not self._configured:
            raise BackendError(BackendErrorKind.NOT_CONFIGURED, SETUP_INSTRUCTIONS)

        request_headers = self._get_headers(bearer)
        if headers:
            request_headers.update(headers)

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.request(
                method,
                f"{self._url}{path}",
                params=params,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.TransportError as exc:
            raise BackendError(
                BackendErrorKind.UNREACHABLE, f"Supabase is unreachable: {exc}"
            ) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code >= 400:
            error = error_from_response(response)
            logger.debug("%s %s -> %s", method, path, error)
            raise error
        return response

    # ── PostgREST ───────────────────────────────────────────────────

    async def select(
        self,
        table: str,
        params: dict[str, Any],
        *,
        count: bool = False,
    ) -> tuple[list[dict[str, Any]], int | None]:
        """Read rows; with ``count`` also return the exact match count."""
        headers = {"Prefer": "count=exact"} if count else None
        response = await self.request("GET", f"/rest/v1/{table}", params=params, headers=headers)
        total = parse_total(response.headers.get("content-range")) if count else None
        return response.json(), total

    async def select_all(self, table: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Read every matching row, batch by batch."""
        rows: list[dict[str, Any]] = []
        offset = 0
        while True:
            batch, _ = await self.select(
                table, {**params, "offset": offset, "limit": PAGE_BATCH}
            )
            rows.extend(batch)
            if len(batch) < PAGE_BATCH:
                return rows
            offset += PAGE_BATCH

    async def insert(
        self,
        table: str,
        values: dict[str, Any] | list[dict[str, Any]],
        *,
        select: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {"select": select} if select else None
        prefer = "return=representation" if select else "return=minimal"
        response = await self.request(
            "POST", f"/rest/v1/{table}", params=params, json=values, headers={"Prefer": prefer}
        )
        return response.json() if select else []

    async def update(
        self,
        table: str,
        filters: dict[str, Any],
        values: dict[str, Any],
        *,
        select: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {**filters, "select": select or "*"}
        response = await self.request(
            "PATCH",
            f"/rest/v1/{table}",
            params=params,
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return response.json()

    async def delete(self, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        response = await self.request(
            "DELETE",
            f"/rest/v1/{table}",
            params=filters,
            headers={"Prefer": "return=representation"},
        )
        return response.json()

    async def rpc(self, function: str, args: dict[str, Any]) -> Any:
        """Call a remote procedure; returns its decoded JSON result (None if empty)."""
        response = await self.request("POST", f"/rest/v1/rpc/{function}", json=args)
        return response.json() if response.content else None
