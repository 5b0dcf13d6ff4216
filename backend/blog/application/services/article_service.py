"""Application service (use case) for Article operations.

Read paths never raise: a failing store degrades to an empty page, an empty
search result, ``None`` or the default category list so the UI keeps
rendering. Admin write paths propagate every failure.
"""

import logging

from blog.application.interfaces import ArticleRepository
from blog.application.schemas import ArticleCreate, ArticleUpdate
from blog.domain.entities import Article, ArticlePage, Category, normalize_category
from blog.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 6
SEARCH_LIMIT = 10

DEFAULT_CATEGORIES = (
    Category(id=1, name="General"),
    Category(id=2, name="Cat"),
    Category(id=3, name="Inspiration"),
)


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def list_articles(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        category: str | None = None,
    ) -> ArticlePage:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")

        try:
            return await self._repository.list_articles(
                page, page_size, normalize_category(category)
            )
        except Exception as exc:
            logger.warning(
                "Error fetching articles (page=%d, category=%s): %s", page, category, exc
            )
            return ArticlePage.empty(page)

    async def search_articles(self, keyword: str) -> list[Article]:
        keyword = keyword.strip()
        if not keyword:
            return []
        try:
            articles = await self._repository.search_articles(keyword, SEARCH_LIMIT)
        except Exception as exc:
            logger.warning("Error searching articles for %r: %s", keyword, exc)
            return []
        return articles[:SEARCH_LIMIT]

    async def get_article(self, article_id: int) -> Article | None:
        try:
            return await self._repository.get_by_id(article_id)
        except Exception as exc:
            logger.warning("Error fetching article %s: %s", article_id, exc)
            return None

    async def list_categories(self) -> list[Category]:
        try:
            return await self._repository.list_categories()
        except Exception as exc:
            logger.warning("Error fetching categories, using defaults: %s", exc)
            return list(DEFAULT_CATEGORIES)

    async def create_article(self, data: ArticleCreate) -> Article:
        article = await self._repository.create(data.model_dump(exclude_none=True, mode="json"))
        logger.info("Created article %s: %s", article.id, article.title)
        return article

    async def update_article(self, article_id: int, data: ArticleUpdate) -> Article:
        fields = data.model_dump(exclude_unset=True, mode="json")
        article = await self._repository.update(article_id, fields)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def delete_article(self, article_id: int) -> bool:
        deleted = await self._repository.delete(article_id)
        if not deleted:
            raise EntityNotFoundError("Article", article_id)
        logger.info("Deleted article %s", article_id)
        return True
