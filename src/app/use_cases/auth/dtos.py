"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    full_name: str
    role: UserRole = UserRole.student
    college_id: Optional[str] = None
    student_id: Optional[str] = None
    year: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User record as returned to clients (no password material)"""

    id: str
    email: str
    full_name: str
    role: str
    college_id: Optional[str] = None
    student_id: Optional[str] = None
    year: Optional[str] = None
    is_active: bool
    is_verified: bool
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            role=UserRole(user.role).value,
            college_id=str(user.college_id) if user.college_id else None,
            student_id=user.student_id,
            year=user.year,
            is_active=user.is_active,
            is_verified=user.is_verified,
            last_login_at=user.last_login_at,
        )


class AuthTokenResponse(BaseModel):
    """Response for login and registration"""

    token: str
    user: UserInfo


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    token: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    message: str
