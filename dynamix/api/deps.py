"""
API Dependencies

Reusable dependencies for API routes.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from dynamix.core.config import settings
from dynamix.core.database import get_db
from dynamix.core.exceptions import UnauthorizedError
from dynamix.core.security import decode_access_token
from dynamix.models.user import User
from dynamix.schemas.token import TokenPayload
from dynamix.services import user_service


# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: DbSession,
) -> User:
    """
    Dependency to get the current authenticated user.

    This dependency:
    1. Extracts the JWT token from the Authorization header
    2. Decodes and validates the token
    3. Fetches the user from the database
    4. Raises 401 if token is invalid or user not found

    Raises:
        UnauthorizedError: 401 if authentication fails.
    """
    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedError("Could not validate credentials")

    try:
        token_data = TokenPayload.model_validate(payload)
    except ValidationError:
        raise UnauthorizedError("Could not validate credentials")

    user = await user_service.get_user_by_id(token_data.sub, db)
    if user is None:
        raise UnauthorizedError("Could not validate credentials")

    return user
