from .article_repository import ArticleRepository
from .blob_store import BlobStore
from .engagement_repository import EngagementRepository
from .identity_provider import IdentityProvider, UserRepository

__all__ = [
    "ArticleRepository",
    "BlobStore",
    "EngagementRepository",
    "IdentityProvider",
    "UserRepository",
]
