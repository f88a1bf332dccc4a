"""
Token Schemas

Pydantic models for JWT token handling.
"""

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Schema for decoded token payload."""

    sub: str  # User ID
    exp: int  # Expiration timestamp
