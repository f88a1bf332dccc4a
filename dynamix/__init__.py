"""
Dynamix LMS Backend

Learning-management REST backend: users, courses and enrollments.
"""

__version__ = "0.1.0"
