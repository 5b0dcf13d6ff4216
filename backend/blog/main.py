"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog.config import SETUP_INSTRUCTIONS, get_settings
from blog.infrastructure.container import BlogContainer
from blog.infrastructure.logging.log_config import setup_logging
from blog.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _check_buckets(container: BlogContainer) -> None:
    """Warn about storage buckets the uploads will need but that do not exist."""
    media = container.media_service()
    for bucket in (container.settings.avatars_bucket, container.settings.thumbnails_bucket):
        if await media.bucket_exists(bucket):
            logger.debug("Storage bucket '%s' is available", bucket)
        else:
            logger.warning(
                "Storage bucket '%s' not found; create it in Supabase Storage with public access",
                bucket,
            )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — build adapters, select the article tier, start maintenance."""
    settings = get_settings()
    setup_logging(settings)

    container = BlogContainer.build(settings)
    app.state.container = container

    # 1. Pick the article store tier once; reads stay on it until it fails
    if not settings.supabase_configured:
        logger.warning(SETUP_INSTRUCTIONS)
    await container.articles.probe()

    # 2. Storage buckets used for profile pictures and article thumbnails
    if settings.supabase_configured:
        await _check_buckets(container)

    # 3. Periodic like-counter reconciliation
    reconciler = container.like_count_reconciler()
    if reconciler is not None:
        await reconciler.start()

    yield

    # Shutdown
    if reconciler is not None:
        await reconciler.stop()
    await container.aclose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blog.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
