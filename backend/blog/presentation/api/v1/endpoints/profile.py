"""Profile editing endpoint."""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from blog.application.schemas import SessionUserResponse
from blog.application.services import ProfileService
from blog.domain.entities import SessionUser
from blog.domain.exceptions import ImageValidationError, ProfileUpdateError
from blog.infrastructure.dependencies import get_profile_service, require_user
from blog.presentation.api.v1.endpoints.auth import to_user_response
from blog.presentation.api.v1.errors import read_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.put("", response_model=SessionUserResponse)
async def update_profile(
    name: str = Form(..., min_length=1, max_length=100),
    username: str = Form(..., min_length=1, max_length=50),
    image: UploadFile | None = File(None),
    user: SessionUser = Depends(require_user),
    service: ProfileService = Depends(get_profile_service),
) -> SessionUserResponse:
    """Update name, username and (optionally) the profile picture."""
    picture = await read_image(image) if image is not None and image.filename else None
    try:
        updated = await service.update_profile(user, name, username, picture)
    except ImageValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ProfileUpdateError as e:
        logger.warning("Profile update failed for %s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return to_user_response(updated)
