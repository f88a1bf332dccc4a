"""
Domain Exceptions

The four failure kinds surfaced by the core. Each is an HTTPException so
FastAPI renders it directly as ``{"detail": "<message>"}``.
"""

from typing import Dict, Optional

from fastapi import HTTPException, status


class LMSError(HTTPException):
    """Base class for domain failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal error"

    def __init__(
        self,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )

    def __str__(self) -> str:
        return str(self.detail)


class NotFoundError(LMSError):
    """A referenced user, course, module or enrollment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class UnauthorizedError(LMSError):
    """Credential mismatch or invalid token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid credentials"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class BadRequestError(LMSError):
    """Missing or unacceptable input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class ConflictError(BadRequestError):
    """
    Uniqueness violation (email, enrollment pair, course id).

    A BadRequest on the wire: the public API reports duplicates as 400.
    """

    default_detail = "Already exists"
