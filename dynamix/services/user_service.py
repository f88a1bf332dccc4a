"""
User Service

Storage operations for users: creation with a unique, case-insensitive
email, lookups and partial profile updates.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dynamix.core.config import settings
from dynamix.core.exceptions import ConflictError, NotFoundError
from dynamix.core.ids import USER_PREFIX, new_id
from dynamix.core.security import hash_password
from dynamix.models.enums import UserRole
from dynamix.models.user import User
from dynamix.schemas.user import UserUpdate


logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def default_avatar_url(name: str) -> str:
    """Build the generated avatar URL seeded from a display name."""
    seed = "".join(name.split())
    return settings.AVATAR_URL_TEMPLATE.format(seed=seed)


async def get_user_by_id(
    user_id: str,
    db: AsyncSession,
) -> Optional[User]:
    """
    Get a user by ID.

    Args:
        user_id: User ID.
        db: Database session.

    Returns:
        User object or None if not found.
    """
    result = await db.execute(
        select(User).where(User.id == user_id)
    )
    return result.scalar_one_or_none()


async def get_user_by_email(
    email: str,
    db: AsyncSession,
) -> Optional[User]:
    """
    Find a user by email, ignoring case.

    Emails are stored lowercase, so normalizing the query is enough.
    """
    result = await db.execute(
        select(User).where(User.email == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.STUDENT,
    avatar_url: Optional[str] = None,
    user_id: Optional[str] = None,
) -> User:
    """
    Create a user with a hashed password.

    Args:
        db: Database session.
        name: Display name.
        email: Email address (stored lowercase).
        password: Plain text password, hashed before storage.
        role: STUDENT or TEACHER.
        avatar_url: Optional avatar; a generated one is used otherwise.
        user_id: Optional fixed id (seeding); generated otherwise.

    Returns:
        The persisted User.

    Raises:
        ConflictError: If the email is already registered.
    """
    email = normalize_email(email)

    if await get_user_by_email(email, db):
        raise ConflictError("User already exists")

    user = User(
        id=user_id or new_id(USER_PREFIX),
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        avatar_url=avatar_url or default_avatar_url(name),
    )
    db.add(user)

    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same email
        await db.rollback()
        raise ConflictError("User already exists") from exc

    await db.refresh(user)
    logger.info("Created %s user %s", user.role.value, user.id)
    return user


async def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: AsyncSession,
) -> User:
    """
    Apply a partial profile update.

    Only fields present in the request are applied. An email change is
    checked for uniqueness against every other user.

    Args:
        user_id: Target user ID.
        user_update: Fields to update (name, email, avatar_url).
        db: Database session.

    Returns:
        Updated User.

    Raises:
        NotFoundError: If the user does not exist.
        ConflictError: If the new email belongs to another user.
    """
    user = await get_user_by_id(user_id, db)
    if not user:
        raise NotFoundError("User not found")

    changes = user_update.model_dump(exclude_unset=True)

    if changes.get("email") is not None:
        email = normalize_email(changes["email"])
        result = await db.execute(
            select(User).where(User.email == email, User.id != user_id)
        )
        if result.scalar_one_or_none():
            raise ConflictError("Email already in use")
        user.email = email

    if changes.get("name") is not None:
        user.name = changes["name"]

    if "avatar_url" in changes:
        user.avatar_url = changes["avatar_url"]

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Email already in use") from exc

    await db.refresh(user)
    return user
