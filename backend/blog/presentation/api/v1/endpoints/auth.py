"""Authentication endpoints — login, registration, logout and the current user."""

from fastapi import APIRouter, Depends, HTTPException, status

from blog.application.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    SessionUserResponse,
)
from blog.application.services import IdentitySessionManager
from blog.domain.entities import SessionUser
from blog.infrastructure.dependencies import get_session_manager, require_user

router = APIRouter(prefix="/auth", tags=["Auth"])


def to_user_response(user: SessionUser) -> SessionUserResponse:
    return SessionUserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        username=user.username,
        role=user.role.value,
        profile_pic=user.profile_pic,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    manager: IdentitySessionManager = Depends(get_session_manager),
) -> LoginResponse:
    """Password sign-in; returns the session tokens and the resolved user."""
    result = await manager.login(data.email, data.password)
    if not result.ok or result.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error or "Login failed"
        )
    return LoginResponse(
        user=to_user_response(result.user),
        access_token=result.user.access_token,
        refresh_token=result.user.refresh_token,
    )


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    manager: IdentitySessionManager = Depends(get_session_manager),
) -> MessageResponse:
    result = await manager.register(data.email, data.password, data.name, data.username)
    if result.error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return MessageResponse(
        message="Registration successful. Please check your email to confirm your account."
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    manager: IdentitySessionManager = Depends(get_session_manager),
) -> MessageResponse:
    """Sign out the bearer token's session; always succeeds locally."""
    await manager.logout()
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=SessionUserResponse)
async def me(user: SessionUser = Depends(require_user)) -> SessionUserResponse:
    return to_user_response(user)
