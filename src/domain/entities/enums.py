"""
Campus Session Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform role of a user"""

    super_admin = "super_admin"
    college_admin = "college_admin"
    student = "student"
    user = "user"

    @property
    def requires_college(self) -> bool:
        """college_admin and student accounts belong to exactly one college"""
        return self in (UserRole.college_admin, UserRole.student)
