"""Concrete engagement repository backed by Supabase PostgREST.

Tables / procedures:
    post_likes                      id, post_id, user_id  (unique post_id, user_id)
    comments                        id, post_id, user_id, comment_text, created_at
    rpc increment_likes(post_id)    posts.likes + 1
    rpc decrement_likes(post_id)    posts.likes - 1
    rpc toggle_post_like(post_id, user_id) -> boolean   (optional, transactional)
"""

from collections import Counter
from typing import Any

from blog.application.interfaces import EngagementRepository
from blog.domain.entities import Comment, DEFAULT_COMMENT_AUTHOR
from blog.infrastructure.supabase.client import SupabaseClient, eq, parse_timestamp

COMMENT_COLUMNS = "id,post_id,comment_text,created_at,users!inner(name,profile_pic)"


class SupabaseEngagementRepository(EngagementRepository):
    """Implements the EngagementRepository port with PostgREST tables and RPCs."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    def _to_comment(self, row: dict[str, Any], article_id: int) -> Comment:
        author = row.get("users") or {}
        comment = Comment(
            id=row.get("id"),
            article_id=row.get("post_id") or article_id,
            text=row.get("comment_text") or "",
            author_name=author.get("name") or DEFAULT_COMMENT_AUTHOR,
            author_image=author.get("profile_pic"),
        )
        created_at = parse_timestamp(row.get("created_at"))
        if created_at is not None:
            comment.created_at = created_at
        return comment

    @staticmethod
    def _like_filters(article_id: int, user_id: str) -> dict[str, str]:
        return {"post_id": eq(article_id), "user_id": eq(user_id)}

    # ── Likes ───────────────────────────────────────────────────────

    async def toggle_like_atomic(self, article_id: int, user_id: str) -> bool:
        result = await self._client.rpc(
            "toggle_post_like", {"post_id": article_id, "user_id": user_id}
        )
        return bool(result)

    async def has_like(self, article_id: int, user_id: str) -> bool:
        params = {"select": "id", **self._like_filters(article_id, user_id), "limit": 1}
        rows, _ = await self._client.select("post_likes", params)
        return bool(rows)

    async def add_like(self, article_id: int, user_id: str) -> None:
        await self._client.insert("post_likes", [{"post_id": article_id, "user_id": user_id}])

    async def remove_like(self, article_id: int, user_id: str) -> None:
        await self._client.delete("post_likes", self._like_filters(article_id, user_id))

    async def increment_likes(self, article_id: int) -> None:
        await self._client.rpc("increment_likes", {"post_id": article_id})

    async def decrement_likes(self, article_id: int) -> None:
        await self._client.rpc("decrement_likes", {"post_id": article_id})

    async def like_counters(self) -> dict[int, int]:
        rows = await self._client.select_all("posts", {"select": "id,likes", "order": "id.asc"})
        return {row["id"]: row.get("likes") or 0 for row in rows}

    async def like_row_counts(self) -> dict[int, int]:
        rows = await self._client.select_all("post_likes", {"select": "post_id", "order": "id.asc"})
        return dict(Counter(row["post_id"] for row in rows))

    async def set_like_counter(self, article_id: int, likes: int) -> None:
        await self._client.update("posts", {"id": eq(article_id)}, {"likes": likes}, select="id")

    # ── Comments ────────────────────────────────────────────────────

    async def list_comments(self, article_id: int) -> list[Comment]:
        params = {
            "select": COMMENT_COLUMNS,
            "post_id": eq(article_id),
            "order": "created_at.desc",
        }
        rows, _ = await self._client.select("comments", params)
        return [self._to_comment(row, article_id) for row in rows]

    async def add_comment(self, article_id: int, user_id: str, text: str) -> Comment:
        rows = await self._client.insert(
            "comments",
            [{"post_id": article_id, "user_id": user_id, "comment_text": text}],
            select=COMMENT_COLUMNS,
        )
        return self._to_comment(rows[0], article_id)
