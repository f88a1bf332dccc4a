"""
User Schemas

Pydantic models for user request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from dynamix.models.enums import UserRole
from dynamix.schemas.base import APIModel


class UserCreate(APIModel):
    """Schema for registering a new user."""

    name: str = Field(..., min_length=1, max_length=255, description="User's display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, max_length=72, description="Password (8-72 characters)")
    role: UserRole = Field(default=UserRole.STUDENT, description="User role")
    avatar_url: Optional[str] = Field(None, max_length=512, description="Profile picture URL")


class UserResponse(APIModel):
    """Schema for user response (excludes password)."""

    id: str
    name: str
    email: str
    role: UserRole
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(UserResponse):
    """User profile plus an access token, returned by login and register."""

    access_token: str
    token_type: str = "bearer"


class UserUpdate(APIModel):
    """
    Schema for a partial profile update.

    Only fields present in the request body are applied.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255, description="New display name")
    email: Optional[EmailStr] = Field(None, description="New email address")
    avatar_url: Optional[str] = Field(None, max_length=512, description="New profile picture URL")


class UserLogin(APIModel):
    """Schema for user login request."""

    email: str = Field(..., min_length=1, max_length=255, description="User's email address")
    password: str = Field(..., description="User's password")
