"""Domain entities for reader engagement — comments and likes."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

DEFAULT_COMMENT_AUTHOR = "Anonymous"


@dataclass
class Comment:
    """A reader comment on an article. Immutable once created."""

    article_id: int
    text: str
    id: int | None = None
    author_name: str = DEFAULT_COMMENT_AUTHOR
    author_image: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class LikeToggleResult:
    """Outcome of a like/unlike toggle: True when the user now likes the article."""

    liked: bool
