from .static_article_repository import StaticArticleRepository, load_articles
from .tiered_article_repository import TierSelection, TieredArticleRepository

__all__ = [
    "StaticArticleRepository",
    "TierSelection",
    "TieredArticleRepository",
    "load_articles",
]
