"""Application service for likes and comments."""

import logging

from blog.application.interfaces import EngagementRepository
from blog.domain.entities import Comment, LikeToggleResult
from blog.domain.exceptions import BackendError, BackendErrorKind, UnauthenticatedError

logger = logging.getLogger(__name__)


class EngagementService:
    """Like toggling, like-counter reconciliation and comments."""

    def __init__(self, repository: EngagementRepository):
        self._repository = repository

    async def toggle_like(self, article_id: int, user_id: str | None) -> LikeToggleResult:
        """Like the article if the user has not yet, otherwise unlike it.

        Uses the backend's atomic toggle procedure when it is installed. On
        backends without it the like row and the counter are changed by two
        separate calls; a failed counter call is logged and left for
        ``reconcile_like_counts`` to repair.
        """
        if not user_id:
            raise UnauthenticatedError("like posts")

        try:
            liked = await self._repository.toggle_like_atomic(article_id, user_id)
            return LikeToggleResult(liked=liked)
        except BackendError as exc:
            if exc.kind is not BackendErrorKind.FUNCTION_NOT_FOUND:
                raise
            logger.debug("Atomic like toggle unavailable, using two-step toggle")

        if await self._repository.has_like(article_id, user_id):
            await self._repository.remove_like(article_id, user_id)
            try:
                await self._repository.decrement_likes(article_id)
            except BackendError as exc:
                logger.warning("Failed to decrement likes count for article %s: %s", article_id, exc)
            return LikeToggleResult(liked=False)

        await self._repository.add_like(article_id, user_id)
        try:
            await self._repository.increment_likes(article_id)
        except BackendError as exc:
            logger.warning("Failed to increment likes count for article %s: %s", article_id, exc)
        return LikeToggleResult(liked=True)

    async def has_liked(self, article_id: int, user_id: str | None) -> bool:
        if not user_id:
            return False
        try:
            return await self._repository.has_like(article_id, user_id)
        except Exception as exc:
            logger.debug("Like lookup failed for article %s: %s", article_id, exc)
            return False

    async def reconcile_like_counts(self) -> int:
        """Rewrite every drifted like counter from the like rows.

        Returns the number of articles whose counter was corrected.
        """
        counters = await self._repository.like_counters()
        actual = await self._repository.like_row_counts()

        corrected = 0
        for article_id, stored in counters.items():
            expected = actual.get(article_id, 0)
            if stored == expected:
                continue
            await self._repository.set_like_counter(article_id, expected)
            logger.info(
                "Reconciled like counter for article %s: %d -> %d", article_id, stored, expected
            )
            corrected += 1
        return corrected

    async def list_comments(self, article_id: int) -> list[Comment]:
        """Comments of an article, newest first. Empty on any failure."""
        try:
            comments = await self._repository.list_comments(article_id)
        except Exception as exc:
            logger.warning("Error fetching comments for article %s: %s", article_id, exc)
            return []
        return sorted(comments, key=lambda c: c.created_at, reverse=True)

    async def add_comment(self, article_id: int, user_id: str | None, text: str) -> Comment:
        if not user_id:
            raise UnauthenticatedError("comment")
        text = text.strip()
        if not text:
            raise ValueError("Comment text must not be empty")
        return await self._repository.add_comment(article_id, user_id, text)
