"""Category listing endpoint."""

from fastapi import APIRouter, Depends

from blog.application.schemas import CategoryResponse
from blog.application.services import ArticleService
from blog.infrastructure.dependencies import get_article_service

router = APIRouter(prefix="/categories", tags=["Articles"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    service: ArticleService = Depends(get_article_service),
) -> list[CategoryResponse]:
    categories = await service.list_categories()
    return [CategoryResponse.model_validate(c, from_attributes=True) for c in categories]
