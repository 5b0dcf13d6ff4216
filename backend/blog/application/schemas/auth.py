"""Pydantic DTOs for authentication and profile editing."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, examples=["reader@example.com"])
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=50)


class SessionUserResponse(BaseModel):
    id: str
    email: str
    name: str
    username: str
    role: str
    profile_pic: str | None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    user: SessionUserResponse
    access_token: str | None
    refresh_token: str | None


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    url: str
    path: str | None = None
