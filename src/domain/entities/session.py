"""
UserSession Entity

Server-side record backing every issued access token.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class UserSession(SQLModel, table=True):
    """
    UserSession entity - one row per login.

    Business Rules:
    - token_hash is the SHA-256 fingerprint of the bearer token, never the token
    - At most one row per user is active (not revoked, not expired)
    - Refresh replaces token_hash and expires_at in place
    - Logout and superseding logins set is_revoked; rows are never deleted live
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    token_hash: str = Field(max_length=64)  # SHA-256 hex digest
    is_revoked: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_user_session_token_hash", "token_hash"),
        Index("idx_user_session_user_revoked", "user_id", "is_revoked"),
        Index("idx_user_session_expires_at", "expires_at"),
    )
