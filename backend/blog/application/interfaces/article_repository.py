"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod
from typing import Any

from blog.domain.entities import Article, ArticlePage, Category


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def list_articles(
        self, page: int, page_size: int, category: str | None = None
    ) -> ArticlePage:
        """Return one newest-first page of articles, optionally within a category."""
        ...

    @abstractmethod
    async def search_articles(self, keyword: str, limit: int) -> list[Article]:
        """Case-insensitive substring search over title, description and content."""
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """Retrieve every category."""
        ...

    @abstractmethod
    async def create(self, fields: dict[str, Any]) -> Article:
        """Persist a new article and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, article_id: int, fields: dict[str, Any]) -> Article | None:
        """Update an existing article. Returns None if it does not exist."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...
