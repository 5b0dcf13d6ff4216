"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter, Request

from blog.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns the application health status and the article store tier in use."""
    settings = get_settings()
    container = getattr(request.app.state, "container", None)
    if container is None:
        article_store = "unknown"
    else:
        article_store = "fallback" if container.articles.using_fallback else "supabase"
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "supabase_configured": settings.supabase_configured,
        "article_store": article_store,
    }
