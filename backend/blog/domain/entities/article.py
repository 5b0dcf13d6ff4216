"""Domain entities — pure Python business objects, no framework dependencies."""

import math
from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_CATEGORY = "General"
DEFAULT_AUTHOR = "Unknown Author"

# Category sentinel used by the home page tabs; it means "every category".
HIGHLIGHT_CATEGORY = "Highlight"


@dataclass
class Article:
    """Core domain entity representing a published blog post."""

    title: str
    description: str = ""
    content: str = ""
    id: int | None = None
    image: str | None = None
    category: str = DEFAULT_CATEGORY
    author: str = DEFAULT_AUTHOR
    author_image: str | None = None
    date: datetime | None = None
    likes: int = 0

    def __post_init__(self) -> None:
        self.likes = max(int(self.likes or 0), 0)
        self.category = self.category or DEFAULT_CATEGORY
        self.author = self.author or DEFAULT_AUTHOR

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match over title, description and content."""
        needle = keyword.lower()
        return any(
            needle in (text or "").lower()
            for text in (self.title, self.description, self.content)
        )


@dataclass
class Category:
    """A named article category."""

    id: int
    name: str


@dataclass
class ArticlePage:
    """One page of articles plus the pagination bookkeeping the UI needs."""

    items: list[Article] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    has_more: bool = False

    @classmethod
    def from_total(cls, items: list[Article], page: int, page_size: int, total: int) -> "ArticlePage":
        """Build a page from the full match count of the underlying query."""
        total_pages = math.ceil(total / page_size) if total > 0 else 0
        return cls(
            items=items,
            current_page=page,
            total_pages=total_pages,
            has_more=page < total_pages,
        )

    @classmethod
    def empty(cls, page: int) -> "ArticlePage":
        return cls(items=[], current_page=page, total_pages=0, has_more=False)


def normalize_category(category: str | None) -> str | None:
    """Map the "Highlight" sentinel (and blanks) to no filter."""
    if not category or category == HIGHLIGHT_CATEGORY:
        return None
    return category
