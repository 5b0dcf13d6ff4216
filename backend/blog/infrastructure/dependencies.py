"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request, status

from blog.application.services import (
    ArticleService,
    EngagementService,
    IdentitySessionManager,
    MediaService,
    ProfileService,
)
from blog.domain.entities import SessionUser
from blog.infrastructure.container import BlogContainer


def get_container(request: Request) -> BlogContainer:
    """The process-wide container built in the lifespan."""
    return request.app.state.container


def get_access_token(authorization: str | None = Header(default=None)) -> str | None:
    """Bearer token from the ``Authorization`` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session_manager(
    container: BlogContainer = Depends(get_container),
    access_token: str | None = Depends(get_access_token),
) -> AsyncGenerator[IdentitySessionManager, None]:
    """Provides a session manager seeded from the request's bearer token."""
    manager = container.session_manager()
    manager.restore(access_token)
    if access_token:
        await manager.fetch_current_user()
    yield manager


async def get_current_user(
    manager: IdentitySessionManager = Depends(get_session_manager),
) -> SessionUser | None:
    return manager.current_user


async def require_user(
    user: SessionUser | None = Depends(get_current_user),
) -> SessionUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(user: SessionUser = Depends(require_user)) -> SessionUser:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return user


async def get_article_service(
    container: BlogContainer = Depends(get_container),
    access_token: str | None = Depends(get_access_token),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService; reads and writes act as the caller."""
    yield container.article_service(access_token)


async def get_engagement_service(
    container: BlogContainer = Depends(get_container),
    access_token: str | None = Depends(get_access_token),
) -> AsyncGenerator[EngagementService, None]:
    yield container.engagement_service(access_token)


async def get_media_service(
    container: BlogContainer = Depends(get_container),
    access_token: str | None = Depends(get_access_token),
) -> AsyncGenerator[MediaService, None]:
    yield container.media_service(access_token)


async def get_profile_service(
    container: BlogContainer = Depends(get_container),
    access_token: str | None = Depends(get_access_token),
) -> AsyncGenerator[ProfileService, None]:
    yield container.profile_service(access_token)


async def get_admin_engagement_service(
    container: BlogContainer = Depends(get_container),
) -> AsyncGenerator[EngagementService, None]:
    """Engagement service over the service role, for maintenance tasks."""
    if container.admin_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="SUPABASE_SERVICE_ROLE_KEY is not configured",
        )
    yield container.engagement_service_as_admin()
