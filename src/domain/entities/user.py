"""
User Entity

Credential record of a person who can log in.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - credential and identity of a platform user.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - college_admin and student require college_id; super_admin and user forbid it
    - student requires student_id
    - Never hard-deleted: deactivation clears is_active
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    full_name: str = Field(default="", max_length=255)

    role: UserRole = Field(default=UserRole.student)

    # Tenant association
    college_id: Optional[UUID] = Field(default=None, foreign_key="colleges.id", index=True)
    student_id: Optional[str] = Field(default=None, max_length=50)
    year: Optional[str] = Field(default=None, max_length=20)

    is_active: bool = Field(default=True)
    is_verified: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role_college", "role", "college_id"),)
