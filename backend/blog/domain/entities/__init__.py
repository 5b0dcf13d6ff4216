from .article import (
    Article,
    ArticlePage,
    Category,
    DEFAULT_AUTHOR,
    DEFAULT_CATEGORY,
    HIGHLIGHT_CATEGORY,
    normalize_category,
)
from .comment import Comment, LikeToggleResult, DEFAULT_COMMENT_AUTHOR
from .media import ImageFile, UploadResult
from .user import AuthResult, Role, SessionUser

__all__ = [
    "Article",
    "ArticlePage",
    "Category",
    "DEFAULT_AUTHOR",
    "DEFAULT_CATEGORY",
    "HIGHLIGHT_CATEGORY",
    "normalize_category",
    "Comment",
    "LikeToggleResult",
    "DEFAULT_COMMENT_AUTHOR",
    "ImageFile",
    "UploadResult",
    "AuthResult",
    "Role",
    "SessionUser",
]
