from .article_service import ArticleService
from .engagement_service import EngagementService
from .like_count_reconciler import LikeCountReconciler
from .media_service import MediaService
from .profile_service import ProfileService
from .session_manager import IdentitySessionManager

__all__ = [
    "ArticleService",
    "EngagementService",
    "LikeCountReconciler",
    "MediaService",
    "ProfileService",
    "IdentitySessionManager",
]
