"""
Auth Service

Login and registration. Registration of a student also tries to enroll
them in a starter course.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dynamix.core.config import settings
from dynamix.core.exceptions import UnauthorizedError
from dynamix.core.security import create_access_token, verify_password
from dynamix.models.course import Course
from dynamix.models.enums import UserRole
from dynamix.models.user import User
from dynamix.schemas.user import AuthResponse, UserCreate
from dynamix.services import course_service, enrollment_service, user_service


logger = logging.getLogger(__name__)


def build_auth_response(user: User) -> AuthResponse:
    """Public user profile plus a fresh access token."""
    return AuthResponse.model_validate(
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "avatar_url": user.avatar_url,
            "created_at": user.created_at,
            "access_token": create_access_token(user.id),
        }
    )


async def login(
    email: str,
    password: str,
    db: AsyncSession,
) -> User:
    """
    Resolve credentials to a user.

    Raises:
        UnauthorizedError: If the email is unknown or the password is wrong.
    """
    user = await user_service.get_user_by_email(email, db)

    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")

    return user


async def pick_default_course(db: AsyncSession) -> Optional[Course]:
    """
    Course new students are enrolled in.

    DEFAULT_COURSE_ID when set and present, otherwise the first course
    in the catalog.
    """
    if settings.DEFAULT_COURSE_ID:
        course = await course_service.get_course(settings.DEFAULT_COURSE_ID, db)
        if course:
            return course

    courses = await course_service.list_courses(db)
    return courses[0] if courses else None


async def auto_enroll(user: User, db: AsyncSession) -> None:
    """
    Enroll a new student in the default course.

    Best effort: any failure is logged and never propagates.
    """
    try:
        course = await pick_default_course(db)
        if course is None:
            logger.info("No course available to auto-enroll user %s", user.id)
            return
        await enrollment_service.enroll(user.id, course.id, db)
    except Exception:
        await db.rollback()
        await db.refresh(user)
        logger.warning("Auto-enrollment failed for user %s", user.id, exc_info=True)


async def register(
    user_data: UserCreate,
    db: AsyncSession,
) -> User:
    """
    Register a new user.

    **Flow:**
    1. Create the user (email uniqueness is enforced by the user service)
    2. If the user is a student, auto-enroll them in the default course

    Args:
        user_data: Registration data (name, email, password, role).
        db: Database session.

    Returns:
        The created User.

    Raises:
        ConflictError: If the email is already registered (400).
    """
    user = await user_service.create_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        avatar_url=user_data.avatar_url,
    )

    if user.role == UserRole.STUDENT:
        await auto_enroll(user, db)

    return user
