"""
Dynamix LMS - Services Module

Business logic layer.
"""

from dynamix.services import user_service
from dynamix.services import course_service
from dynamix.services import enrollment_service
from dynamix.services import auth_service
from dynamix.services import seed_service

__all__ = [
    "user_service",
    "course_service",
    "enrollment_service",
    "auth_service",
    "seed_service",
]
