"""
College Entity

The tenant a college_admin or student belongs to.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class College(SQLModel, table=True):
    """
    College entity - tenant boundary for college-scoped users and content.

    Business Rules:
    - Code is unique and stored upper-cased
    - Inactive colleges are hidden from public listings
    """

    __tablename__ = "colleges"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    code: str = Field(unique=True, index=True, max_length=20)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_college_is_active", "is_active"),)
