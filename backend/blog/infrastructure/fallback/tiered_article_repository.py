"""Two-tier article repository — remote store first, bundled dataset second."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from blog.application.interfaces import ArticleRepository
from blog.domain.entities import Article, ArticlePage, Category
from blog.domain.exceptions import BackendError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TierSelection:
    """Process-wide cached choice of tier, shared by every repository view."""

    use_fallback: bool = False


class TieredArticleRepository(ArticleRepository):
    """Routes reads to the primary store or to the fallback dataset.

    The tier is chosen by ``probe()`` at startup and cached. While the
    primary is selected, a read that finds it unconfigured, unreachable or
    missing its tables is answered from the fallback for that call only;
    the cached tier is left alone so the next read tries the primary again.
    Every other failure propagates. Writes go to the primary, or are refused
    by the read-only fallback while it is the selected tier.
    """

    def __init__(
        self,
        primary: ArticleRepository,
        fallback: ArticleRepository,
        selection: TierSelection | None = None,
    ):
        self._primary = primary
        self._fallback = fallback
        self._selection = selection or TierSelection()

    @property
    def using_fallback(self) -> bool:
        return self._selection.use_fallback

    def with_primary(self, primary: ArticleRepository) -> "TieredArticleRepository":
        """A view over another primary (e.g. acting as a signed-in user), same cached tier."""
        return TieredArticleRepository(primary, self._fallback, self._selection)

    async def probe(self) -> bool:
        """Select the tier for subsequent reads. Returns True if the primary is usable."""
        self._selection.use_fallback = False
        try:
            await self._primary.list_articles(1, 1)
        except BackendError as exc:
            if exc.store_unavailable:
                self._switch_to_fallback(exc)
                return False
            logger.warning("Article store probe failed, keeping remote store: %s", exc)
        logger.info("Article store tier: remote")
        return True

    def _switch_to_fallback(self, error: BackendError) -> None:
        logger.warning(
            "Article store unavailable (%s), serving bundled fallback articles", error.message
        )
        self._selection.use_fallback = True

    async def _read(self, operation: Callable[[ArticleRepository], Awaitable[T]]) -> T:
        if self._selection.use_fallback:
            return await operation(self._fallback)
        try:
            return await operation(self._primary)
        except BackendError as exc:
            if not exc.store_unavailable:
                raise
            logger.warning("Article store read failed (%s), answering from fallback", exc.message)
            return await operation(self._fallback)

    async def list_articles(
        self, page: int, page_size: int, category: str | None = None
    ) -> ArticlePage:
        return await self._read(lambda repo: repo.list_articles(page, page_size, category))

    async def search_articles(self, keyword: str, limit: int) -> list[Article]:
        return await self._read(lambda repo: repo.search_articles(keyword, limit))

    async def get_by_id(self, article_id: int) -> Article | None:
        return await self._read(lambda repo: repo.get_by_id(article_id))

    async def list_categories(self) -> list[Category]:
        return await self._read(lambda repo: repo.list_categories())

    @property
    def _writer(self) -> ArticleRepository:
        return self._fallback if self._selection.use_fallback else self._primary

    async def create(self, fields: dict[str, Any]) -> Article:
        return await self._writer.create(fields)

    async def update(self, article_id: int, fields: dict[str, Any]) -> Article | None:
        return await self._writer.update(article_id, fields)

    async def delete(self, article_id: int) -> bool:
        return await self._writer.delete(article_id)
