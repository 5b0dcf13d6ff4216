"""Composition root — builds Supabase adapters and application services.

One ``BlogContainer`` lives on ``app.state`` for the process lifetime. It owns
the shared ``httpx.AsyncClient`` and the cached article tier; everything that
acts as a particular user is built per request from that user's token.
"""

import logging

import httpx

from blog.application.services import (
    ArticleService,
    EngagementService,
    IdentitySessionManager,
    LikeCountReconciler,
    MediaService,
    ProfileService,
)
from blog.config import Settings
from blog.infrastructure.fallback import StaticArticleRepository, TieredArticleRepository
from blog.infrastructure.supabase import (
    SupabaseArticleRepository,
    SupabaseBlobStore,
    SupabaseClient,
    SupabaseEngagementRepository,
    SupabaseIdentityProvider,
    SupabaseUserRepository,
)

logger = logging.getLogger(__name__)


class BlogContainer:
    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        client: SupabaseClient,
        admin_client: SupabaseClient | None,
        articles: TieredArticleRepository,
        owns_http_client: bool = True,
    ):
        self.settings = settings
        self.http_client = http_client
        self.client = client
        self.admin_client = admin_client
        self.articles = articles
        self._owns_http_client = owns_http_client

    @classmethod
    def build(
        cls, settings: Settings, http_client: httpx.AsyncClient | None = None
    ) -> "BlogContainer":
        owns = http_client is None
        http_client = http_client or httpx.AsyncClient(timeout=settings.backend_timeout)

        client = SupabaseClient(
            settings.supabase_url,
            settings.supabase_anon_key,
            http_client=http_client,
            timeout=settings.backend_timeout,
            configured=settings.supabase_configured,
        )
        admin_client = None
        if settings.service_role_configured:
            admin_client = SupabaseClient(
                settings.supabase_url,
                settings.supabase_service_role_key,
                http_client=http_client,
                timeout=settings.backend_timeout,
            )
        else:
            logger.info("No service role key configured; elevated retries are disabled")

        articles = TieredArticleRepository(
            SupabaseArticleRepository(client), StaticArticleRepository()
        )
        return cls(settings, http_client, client, admin_client, articles, owns_http_client=owns)

    def client_for(self, access_token: str | None = None) -> SupabaseClient:
        """Anon-key client, acting as the given user when a token is supplied."""
        if not access_token:
            return self.client
        return self.client.with_access_token(access_token)

    # ── Services ────────────────────────────────────────────────────

    def article_repository(self, access_token: str | None = None) -> TieredArticleRepository:
        if not access_token:
            return self.articles
        return self.articles.with_primary(SupabaseArticleRepository(self.client_for(access_token)))

    def article_service(self, access_token: str | None = None) -> ArticleService:
        return ArticleService(self.article_repository(access_token))

    def engagement_service(self, access_token: str | None = None) -> EngagementService:
        return EngagementService(SupabaseEngagementRepository(self.client_for(access_token)))

    def media_service(self, access_token: str | None = None) -> MediaService:
        elevated = SupabaseBlobStore(self.admin_client) if self.admin_client else None
        return MediaService(
            SupabaseBlobStore(self.client_for(access_token)),
            elevated_blob_store=elevated,
            avatars_bucket=self.settings.avatars_bucket,
            thumbnails_bucket=self.settings.thumbnails_bucket,
            max_upload_size=self.settings.max_upload_size_bytes,
        )

    def session_manager(self) -> IdentitySessionManager:
        return IdentitySessionManager(
            SupabaseIdentityProvider(self.client),
            SupabaseUserRepository(self.client),
            configured=self.settings.supabase_configured,
            site_url=self.settings.site_url,
        )

    def profile_service(self, access_token: str | None = None) -> ProfileService:
        admin_identity = SupabaseIdentityProvider(self.admin_client) if self.admin_client else None
        return ProfileService(
            SupabaseIdentityProvider(self.client),
            SupabaseUserRepository(self.client),
            self.media_service(access_token),
            admin_identity=admin_identity,
        )

    def engagement_service_as_admin(self) -> EngagementService:
        """Engagement over the service role; sees every like row regardless of policies."""
        if self.admin_client is None:
            raise RuntimeError("Service role key is not configured")
        return EngagementService(SupabaseEngagementRepository(self.admin_client))

    def like_count_reconciler(self) -> LikeCountReconciler | None:
        interval = self.settings.like_reconcile_interval
        if interval <= 0 or self.admin_client is None:
            return None
        return LikeCountReconciler(self.engagement_service_as_admin().reconcile_like_counts, interval)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()
