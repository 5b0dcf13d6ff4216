"""Likes and comments endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from blog.application.schemas import CommentCreate, CommentResponse, LikeResponse, ReconcileResponse
from blog.application.services import ArticleService, EngagementService
from blog.domain.entities import SessionUser
from blog.domain.exceptions import BackendError
from blog.infrastructure.dependencies import (
    get_admin_engagement_service,
    get_article_service,
    get_current_user,
    get_engagement_service,
    require_admin,
    require_user,
)
from blog.presentation.api.v1.errors import backend_http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles/{article_id}", tags=["Engagement"])
admin_router = APIRouter(prefix="/admin", tags=["Admin"])


async def _current_likes(articles: ArticleService, article_id: int) -> int | None:
    article = await articles.get_article(article_id)
    return article.likes if article else None


@router.post("/like", response_model=LikeResponse)
async def toggle_like(
    article_id: int,
    user: SessionUser = Depends(require_user),
    service: EngagementService = Depends(get_engagement_service),
    articles: ArticleService = Depends(get_article_service),
) -> LikeResponse:
    """Like the article, or remove the like if the caller already liked it."""
    try:
        result = await service.toggle_like(article_id, user.id)
    except BackendError as e:
        raise backend_http_error(e)
    return LikeResponse(liked=result.liked, likes=await _current_likes(articles, article_id))


@router.get("/like", response_model=LikeResponse)
async def like_status(
    article_id: int,
    user: SessionUser | None = Depends(get_current_user),
    service: EngagementService = Depends(get_engagement_service),
    articles: ArticleService = Depends(get_article_service),
) -> LikeResponse:
    liked = await service.has_liked(article_id, user.id if user else None)
    return LikeResponse(liked=liked, likes=await _current_likes(articles, article_id))


@router.get("/comments", response_model=list[CommentResponse])
async def list_comments(
    article_id: int,
    service: EngagementService = Depends(get_engagement_service),
) -> list[CommentResponse]:
    """Comments of the article, newest first."""
    comments = await service.list_comments(article_id)
    return [CommentResponse.model_validate(c, from_attributes=True) for c in comments]


@router.post("/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    article_id: int,
    data: CommentCreate,
    user: SessionUser = Depends(require_user),
    service: EngagementService = Depends(get_engagement_service),
) -> CommentResponse:
    try:
        comment = await service.add_comment(article_id, user.id, data.text)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except BackendError as e:
        raise backend_http_error(e)
    return CommentResponse.model_validate(comment, from_attributes=True)


@admin_router.post("/likes/reconcile", response_model=ReconcileResponse)
async def reconcile_like_counts(
    _: SessionUser = Depends(require_admin),
    service: EngagementService = Depends(get_admin_engagement_service),
) -> ReconcileResponse:
    """Recompute every article's like counter from the stored likes."""
    try:
        corrected = await service.reconcile_like_counts()
    except BackendError as e:
        raise backend_http_error(e)
    logger.info("Manual like reconciliation corrected %d article(s)", corrected)
    return ReconcileResponse(corrected=corrected)
