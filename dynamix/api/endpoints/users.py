"""
User Routes

Endpoints for user profile management.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from dynamix.api.deps import DbSession, get_current_user
from dynamix.models.user import User
from dynamix.schemas.user import UserResponse, UserUpdate
from dynamix.services import user_service


router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile",
)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Get the profile of the user owning the bearer token.
    """
    return current_user


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user profile",
)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: DbSession,
) -> User:
    """
    Update a user's profile.

    Only provided fields (name, email, avatarUrl) are updated.

    Raises:
        HTTPException: 404 if the user does not exist.
        HTTPException: 400 if the new email is already in use.
    """
    return await user_service.update_user(user_id, user_update, db)
