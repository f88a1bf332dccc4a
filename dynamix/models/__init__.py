"""
Dynamix LMS - Models Module

This module exports all SQLAlchemy models for the application.
Import Base for Alembic migrations.
"""

from dynamix.core.database import Base

# Enums
from dynamix.models.enums import UserRole

# Models
from dynamix.models.user import User
from dynamix.models.course import Course
from dynamix.models.enrollment import Enrollment
from dynamix.models.module_completion import ModuleCompletion

__all__ = [
    # Base
    "Base",
    # Enums
    "UserRole",
    # Models
    "User",
    "Course",
    "Enrollment",
    "ModuleCompletion",
]
