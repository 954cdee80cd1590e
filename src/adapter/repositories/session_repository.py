from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import (
    ISessionRepository,
    SessionNotFoundError,
    SessionStoreError,
)
from src.domain.base import utcnow
from src.domain.entities import User, UserSession


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise SessionStoreError(str(exc)) from exc

    async def _flush(self):
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise SessionStoreError(str(exc)) from exc

    async def insert(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> UserSession:
        """Create a new active session"""
        session_obj = UserSession(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            is_revoked=False,
        )
        self.session.add(session_obj)
        await self._flush()
        try:
            await self.session.refresh(session_obj)
        except SQLAlchemyError as exc:
            raise SessionStoreError(str(exc)) from exc
        return session_obj

    async def revoke_all_active(self, user_id: UUID) -> int:
        """
        Revoke all active sessions for a user.

        Locks the user's row first so concurrent logins for the same user
        serialize here; the later login then sees and revokes the earlier
        login's committed session. SQLite ignores FOR UPDATE and serializes
        writers on its own.
        """
        await self._execute(select(User.id).where(User.id == user_id).with_for_update())

        stmt = (
            update(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_revoked == False)  # noqa: E712
            .values(is_revoked=True)
        )
        result = await self._execute(stmt)
        await self._flush()
        return result.rowcount

    async def revoke_by_token_hash(self, token_hash: str) -> bool:
        """Revoke the session with this fingerprint"""
        stmt = (
            update(UserSession)
            .where(UserSession.token_hash == token_hash, UserSession.is_revoked == False)  # noqa: E712
            .values(is_revoked=True)
        )
        result = await self._execute(stmt)
        await self._flush()
        return result.rowcount > 0

    async def find_active_by_token_hash(self, token_hash: str) -> Optional[UserSession]:
        """Session that is neither revoked nor expired"""
        stmt = (
            select(UserSession)
            .where(
                UserSession.token_hash == token_hash,
                UserSession.is_revoked == False,  # noqa: E712
                UserSession.expires_at > utcnow(),
            )
            .order_by(UserSession.created_at.desc())
        )
        result = await self._execute(stmt)
        return result.scalars().first()

    async def update_token_hash_and_expiry(
        self, old_token_hash: str, new_token_hash: str, new_expires_at: datetime
    ) -> UserSession:
        """Rotate fingerprint and expiry on the same row"""
        stmt = (
            select(UserSession)
            .where(
                UserSession.token_hash == old_token_hash,
                UserSession.is_revoked == False,  # noqa: E712
            )
            .with_for_update()
        )
        result = await self._execute(stmt)
        session_obj = result.scalars().first()
        if session_obj is None:
            raise SessionNotFoundError("Session not found or already revoked")

        session_obj.token_hash = new_token_hash
        session_obj.expires_at = new_expires_at
        self.session.add(session_obj)
        await self._flush()
        return session_obj

    async def delete_created_before(
        self, cutoff: datetime, revoked_only: bool = False
    ) -> int:
        """Delete sessions created before cutoff"""
        stmt = delete(UserSession).where(UserSession.created_at < cutoff)
        if revoked_only:
            stmt = stmt.where(UserSession.is_revoked == True)  # noqa: E712
        result = await self._execute(stmt)
        await self._flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions that expired before now"""
        stmt = delete(UserSession).where(UserSession.expires_at < now)
        result = await self._execute(stmt)
        await self._flush()
        return result.rowcount

    async def get_stats(self, now: datetime) -> Dict[str, int]:
        """Counts of total, active, revoked and expired sessions"""

        async def count(*criteria) -> int:
            stmt = select(func.count()).select_from(UserSession)
            if criteria:
                stmt = stmt.where(*criteria)
            result = await self._execute(stmt)
            return result.scalar_one()

        return {
            "total": await count(),
            "active": await count(
                UserSession.is_revoked == False,  # noqa: E712
                UserSession.expires_at > now,
            ),
            "revoked": await count(UserSession.is_revoked == True),  # noqa: E712
            "expired": await count(UserSession.expires_at < now),
        }
