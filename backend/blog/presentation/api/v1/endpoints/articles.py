"""Article endpoints — public reading and admin CRUD."""

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from blog.application.schemas import (
    ArticleCreate,
    ArticlePageResponse,
    ArticleResponse,
    ArticleSearchResponse,
    ArticleUpdate,
    UploadResponse,
)
from blog.application.services import ArticleService, MediaService
from blog.application.services.article_service import DEFAULT_PAGE_SIZE
from blog.domain.entities import SessionUser
from blog.domain.exceptions import (
    BackendError,
    EntityNotFoundError,
    ImageValidationError,
    ReadOnlyRepositoryError,
)
from blog.infrastructure.dependencies import get_article_service, get_media_service, require_admin
from blog.presentation.api.v1.errors import backend_http_error, read_image

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=ArticlePageResponse)
async def list_articles(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    category: str | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """One page of articles, newest first. ``Highlight`` or no category means all."""
    result = await service.list_articles(page=page, page_size=page_size, category=category)
    return ArticlePageResponse.model_validate(result, from_attributes=True)


@router.get("/search", response_model=ArticleSearchResponse)
async def search_articles(
    q: str = Query("", max_length=200),
    service: ArticleService = Depends(get_article_service),
) -> ArticleSearchResponse:
    """Case-insensitive keyword search over title, description and content."""
    articles = await service.search_articles(q)
    return ArticleSearchResponse(
        items=[ArticleResponse.model_validate(a, from_attributes=True) for a in articles]
    )


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    article = await service.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    admin: SessionUser = Depends(require_admin),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article; the author defaults to the calling admin."""
    if data.author_id is None:
        data = data.model_copy(update={"author_id": admin.id})
    try:
        article = await service.create_article(data)
    except (BackendError, ReadOnlyRepositoryError) as e:
        raise backend_http_error(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    _: SessionUser = Depends(require_admin),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.update_article(article_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (BackendError, ReadOnlyRepositoryError) as e:
        raise backend_http_error(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    _: SessionUser = Depends(require_admin),
    service: ArticleService = Depends(get_article_service),
) -> None:
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (BackendError, ReadOnlyRepositoryError) as e:
        raise backend_http_error(e)


@router.post("/images", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_article_image(
    file: UploadFile,
    _: SessionUser = Depends(require_admin),
    media: MediaService = Depends(get_media_service),
) -> UploadResponse:
    """Upload a thumbnail image for an article; returns its public URL."""
    image = await read_image(file)
    try:
        result = await media.upload_article_image(image)
    except ImageValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if not result.success:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return UploadResponse(url=result.url, path=result.path)
