from .article_repository import SupabaseArticleRepository
from .blob_store import SupabaseBlobStore
from .client import SupabaseClient
from .engagement_repository import SupabaseEngagementRepository
from .identity_provider import SupabaseIdentityProvider
from .user_repository import SupabaseUserRepository

__all__ = [
    "SupabaseArticleRepository",
    "SupabaseBlobStore",
    "SupabaseClient",
    "SupabaseEngagementRepository",
    "SupabaseIdentityProvider",
    "SupabaseUserRepository",
]
