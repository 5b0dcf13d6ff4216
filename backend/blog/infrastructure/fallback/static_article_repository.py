"""Read-only article repository over the bundled ``blog_posts.yaml`` dataset."""

import logging
from pathlib import Path
from typing import Any

import yaml

from blog.application.interfaces import ArticleRepository
from blog.domain.entities import Article, ArticlePage, Category
from blog.domain.exceptions import ReadOnlyRepositoryError
from blog.infrastructure.supabase.client import parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_DATASET = Path(__file__).resolve().parent / "blog_posts.yaml"


def load_articles(path: Path = DEFAULT_DATASET) -> list[Article]:
    """Parse the YAML dataset into Article entities."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    articles = []
    for raw in data.get("posts", []):
        articles.append(_to_entity(raw))
    logger.debug("Loaded %d fallback articles from %s", len(articles), path)
    return articles


def _to_entity(raw: dict[str, Any]) -> Article:
    return Article(
        id=int(raw["id"]),
        title=raw.get("title", ""),
        description=raw.get("description", ""),
        content=raw.get("content", ""),
        image=raw.get("image"),
        category=raw.get("category"),
        author=raw.get("author"),
        author_image=raw.get("author_image"),
        date=parse_timestamp(raw.get("date")),
        likes=raw.get("likes", 0),
    )


class StaticArticleRepository(ArticleRepository):
    """Serves articles from memory with the same filter, paging and search
    semantics as the Supabase repository. Writes are refused."""

    def __init__(self, articles: list[Article] | None = None):
        source = articles if articles is not None else load_articles()
        # Newest first, like the remote ``order=created_at.desc``; stable for ties.
        self._articles = sorted(
            source,
            key=lambda a: a.date.timestamp() if a.date else float("-inf"),
            reverse=True,
        )

    async def list_articles(
        self, page: int, page_size: int, category: str | None = None
    ) -> ArticlePage:
        matches = [a for a in self._articles if category is None or a.category == category]
        start = (page - 1) * page_size
        return ArticlePage.from_total(matches[start : start + page_size], page, page_size, len(matches))

    async def search_articles(self, keyword: str, limit: int) -> list[Article]:
        return [a for a in self._articles if a.matches(keyword)][:limit]

    async def get_by_id(self, article_id: int) -> Article | None:
        return next((a for a in self._articles if a.id == article_id), None)

    async def list_categories(self) -> list[Category]:
        names = list(dict.fromkeys(a.category for a in sorted(self._articles, key=lambda a: a.id or 0)))
        return [Category(id=index, name=name) for index, name in enumerate(names, start=1)]

    async def create(self, fields: dict[str, Any]) -> Article:
        raise ReadOnlyRepositoryError("The bundled fallback articles cannot be modified")

    async def update(self, article_id: int, fields: dict[str, Any]) -> Article | None:
        raise ReadOnlyRepositoryError("The bundled fallback articles cannot be modified")

    async def delete(self, article_id: int) -> bool:
        raise ReadOnlyRepositoryError("The bundled fallback articles cannot be modified")
