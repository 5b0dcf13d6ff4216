from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    ArticlePageResponse,
    ArticleSearchResponse,
    CategoryResponse,
)
from .auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    SessionUserResponse,
    UploadResponse,
)
from .engagement import CommentCreate, CommentResponse, LikeResponse, ReconcileResponse

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticlePageResponse",
    "ArticleSearchResponse",
    "CategoryResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "SessionUserResponse",
    "UploadResponse",
    "CommentCreate",
    "CommentResponse",
    "LikeResponse",
    "ReconcileResponse",
]
