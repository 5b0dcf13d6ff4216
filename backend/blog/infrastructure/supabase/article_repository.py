"""Concrete article repository backed by Supabase PostgREST.

Tables:
    posts       id, title, description, content, image, likes, date,
                created_at, updated_at, category_id, author_id
    categories  id, name
    users       id, name, profile_pic, ...
"""

import re
from typing import Any

from blog.application.interfaces import ArticleRepository
from blog.domain.entities import Article, ArticlePage, Category
from blog.domain.exceptions import BackendError
from blog.infrastructure.supabase.client import SupabaseClient, eq, parse_timestamp

_POST_FIELDS = "id,title,description,content,image,likes,date,created_at,updated_at,author_id"
_AUTHOR_JOIN = "users!author_id(name,profile_pic)"

# Inner join only when filtering by category, so uncategorised posts still list.
POST_COLUMNS = f"{_POST_FIELDS},categories(name),{_AUTHOR_JOIN}"
POST_COLUMNS_BY_CATEGORY = f"{_POST_FIELDS},categories!inner(name),{_AUTHOR_JOIN}"

_LIKE_SPECIALS = re.compile(r"([\\%_])")


def ilike_pattern(keyword: str) -> str:
    """Quoted PostgREST ``ilike`` operand matching ``keyword`` anywhere."""
    escaped = _LIKE_SPECIALS.sub(r"\\\1", keyword)
    escaped = escaped.replace("\\", "\\\\").replace('"', '\\"')
    return f'"*{escaped}*"'


class SupabaseArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port against the ``posts`` table."""

    def __init__(self, client: SupabaseClient):
        self._client = client

    def _to_entity(self, row: dict[str, Any]) -> Article:
        """Map a PostgREST row (with embedded joins) → domain entity."""
        category = row.get("categories") or {}
        author = row.get("users") or {}
        return Article(
            id=row["id"],
            title=row.get("title") or "",
            description=row.get("description") or "",
            content=row.get("content") or "",
            image=row.get("image"),
            category=category.get("name"),
            author=author.get("name"),
            author_image=author.get("profile_pic"),
            date=parse_timestamp(row.get("date") or row.get("created_at")),
            likes=row.get("likes") or 0,
        )

    async def list_articles(
        self, page: int, page_size: int, category: str | None = None
    ) -> ArticlePage:
        params: dict[str, Any] = {
            "select": POST_COLUMNS_BY_CATEGORY if category else POST_COLUMNS,
            "order": "created_at.desc",
            "offset": (page - 1) * page_size,
            "limit": page_size,
        }
        if category:
            params["categories.name"] = eq(category)

        try:
            rows, total = await self._client.select("posts", params, count=True)
        except BackendError as exc:
            # PostgREST answers 416 for an offset past the last row.
            if exc.status_code != 416:
                raise
            rows, total = [], await self._count(category)

        items = [self._to_entity(row) for row in rows]
        if total is None:
            total = (page - 1) * page_size + len(items)
        return ArticlePage.from_total(items, page, page_size, total)

    async def _count(self, category: str | None) -> int:
        params: dict[str, Any] = {"select": "id", "limit": 0}
        if category:
            params["select"] = "id,categories!inner(name)"
            params["categories.name"] = eq(category)
        _, total = await self._client.select("posts", params, count=True)
        return total or 0

    async def search_articles(self, keyword: str, limit: int) -> list[Article]:
        pattern = ilike_pattern(keyword)
        params = {
            "select": POST_COLUMNS,
            "or": f"(title.ilike.{pattern},description.ilike.{pattern},content.ilike.{pattern})",
            "order": "created_at.desc",
            "limit": limit,
        }
        rows, _ = await self._client.select("posts", params)
        return [self._to_entity(row) for row in rows]

    async def get_by_id(self, article_id: int) -> Article | None:
        params = {"select": POST_COLUMNS, "id": eq(article_id), "limit": 1}
        rows, _ = await self._client.select("posts", params)
        return self._to_entity(rows[0]) if rows else None

    async def list_categories(self) -> list[Category]:
        rows, _ = await self._client.select("categories", {"select": "id,name", "order": "id.asc"})
        return [Category(id=row["id"], name=row["name"]) for row in rows]

    async def create(self, fields: dict[str, Any]) -> Article:
        rows = await self._client.insert("posts", fields, select=POST_COLUMNS)
        return self._to_entity(rows[0])

    async def update(self, article_id: int, fields: dict[str, Any]) -> Article | None:
        if not fields:
            return await self.get_by_id(article_id)
        rows = await self._client.update("posts", {"id": eq(article_id)}, fields, select=POST_COLUMNS)
        return self._to_entity(rows[0]) if rows else None

    async def delete(self, article_id: int) -> bool:
        rows = await self._client.delete("posts", {"id": eq(article_id)})
        return bool(rows)
