"""Abstract repository interface (port) for likes and comments."""

from abc import ABC, abstractmethod

from blog.domain.entities import Comment


class EngagementRepository(ABC):
    """Port for the like relation, the per-article like counter and comments."""

    @abstractmethod
    async def toggle_like_atomic(self, article_id: int, user_id: str) -> bool:
        """Flip the like row and the counter in one transaction.

        Returns True when the user now likes the article. Raises a
        ``BackendError`` of kind ``FUNCTION_NOT_FOUND`` when the backend has
        no atomic toggle procedure installed.
        """
        ...

    @abstractmethod
    async def has_like(self, article_id: int, user_id: str) -> bool:
        """Return True if a like row exists for the pair."""
        ...

    @abstractmethod
    async def add_like(self, article_id: int, user_id: str) -> None:
        ...

    @abstractmethod
    async def remove_like(self, article_id: int, user_id: str) -> None:
        ...

    @abstractmethod
    async def increment_likes(self, article_id: int) -> None:
        """Atomically add one to the article's like counter."""
        ...

    @abstractmethod
    async def decrement_likes(self, article_id: int) -> None:
        """Atomically subtract one from the article's like counter."""
        ...

    @abstractmethod
    async def like_counters(self) -> dict[int, int]:
        """Return the stored like counter of every article."""
        ...

    @abstractmethod
    async def like_row_counts(self) -> dict[int, int]:
        """Return the number of like rows per article (articles without likes omitted)."""
        ...

    @abstractmethod
    async def set_like_counter(self, article_id: int, likes: int) -> None:
        ...

    @abstractmethod
    async def list_comments(self, article_id: int) -> list[Comment]:
        """Return the article's comments, newest first."""
        ...

    @abstractmethod
    async def add_comment(self, article_id: int, user_id: str, text: str) -> Comment:
        """Insert a comment and return it with the author's name and avatar resolved."""
        ...
