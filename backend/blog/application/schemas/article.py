"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field


class ArticleCreate(BaseModel):
    """Schema for creating a new article (admin)."""

    title: str = Field(..., min_length=1, max_length=255, examples=["The Fascinating World of Cats"])
    description: str = Field("", max_length=1000)
    content: str = Field(..., min_length=1, examples=["## 1. Independent Yet Affectionate\n..."])
    image: str | None = None
    category_id: int | None = None
    author_id: str | None = None
    date: datetime | None = None


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    content: str | None = Field(None, min_length=1)
    image: str | None = None
    category_id: int | None = None
    date: datetime | None = None


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    title: str
    description: str
    content: str
    image: str | None
    category: str
    author: str
    author_image: str | None
    date: datetime | None
    likes: int

    model_config = {"from_attributes": True}


class ArticlePageResponse(BaseModel):
    items: list[ArticleResponse]
    current_page: int
    total_pages: int
    has_more: bool

    model_config = {"from_attributes": True}


class ArticleSearchResponse(BaseModel):
    items: list[ArticleResponse]


class CategoryResponse(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}
