"""Pydantic DTOs for likes and comments."""

from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    text: str = Field(..., max_length=5000, examples=["Great read!"])


class CommentResponse(BaseModel):
    id: int | None
    article_id: int
    author_name: str
    author_image: str | None
    text: str
    created_at: datetime

    model_config = {"from_attributes": True}


class LikeResponse(BaseModel):
    liked: bool
    likes: int | None = None


class ReconcileResponse(BaseModel):
    corrected: int
