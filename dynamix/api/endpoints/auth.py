"""
Authentication Routes

Handles user registration and login.
"""

from fastapi import APIRouter, status

from dynamix.api.deps import DbSession
from dynamix.schemas.user import AuthResponse, UserCreate, UserLogin
from dynamix.services import auth_service


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user account",
)
async def register(
    user_data: UserCreate,
    db: DbSession,
) -> AuthResponse:
    """
    Create a new user account.

    **Flow:**
    1. Check if email already exists (case-insensitive)
    2. Hash the password using bcrypt
    3. Create new user record
    4. Students are auto-enrolled in the default course (best effort)
    5. Return the profile and an access token

    Raises:
        HTTPException: 400 if email already exists.
    """
    user = await auth_service.register(user_data, db)
    return auth_service.build_auth_response(user)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
)
async def login(
    credentials: UserLogin,
    db: DbSession,
) -> AuthResponse:
    """
    Authenticate a user.

    Returns the user profile (never the password) and a JWT access token.

    Raises:
        HTTPException: 401 if credentials are invalid.
    """
    user = await auth_service.login(credentials.email, credentials.password, db)
    return auth_service.build_auth_response(user)
