"""
Session Manager

Owns the lifecycle of session rows: create on login (revoking every prior
session first), validate on each request, rotate on refresh, revoke on logout.
Callers own the transaction: they enter the unit of work and commit.
"""

import hashlib
import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.app.repositories.session_repository import SessionStoreError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserSession

logger = logging.getLogger(__name__)


def fingerprint(token: str) -> str:
    """SHA-256 hex digest of a bearer token; the only form ever persisted"""
    return hashlib.sha256(token.encode()).hexdigest()


class SessionManager:
    """
    Single-active-session protocol over the session store.

    Invariant: per user, at most one session row is neither revoked nor
    expired. create_session revokes before it inserts, so no instant exists
    where two rows of the same user are active.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create_session(
        self, user_id: UUID, token: str, expires_at: datetime
    ) -> UserSession:
        """
        Revoke all active sessions of the user, then insert the new one.

        Must be the first write of the unit of work: a failed revoke rolls the
        transaction back before the insert is attempted.

        Raises:
            SessionStoreError: the insert failed (login must fail)
        """
        try:
            revoked = await self.uow.sessions.revoke_all_active(user_id)
        except SessionStoreError:
            # A stale session coexisting briefly beats refusing the login
            logger.warning(
                f"Failed to revoke prior sessions for user {user_id}, continuing login",
                exc_info=True,
            )
            await self.uow.rollback()
        else:
            if revoked:
                logger.info(f"Revoked {revoked} prior session(s) for user {user_id}")

        session = await self.uow.sessions.insert(user_id, fingerprint(token), expires_at)
        logger.info(f"Created session {session.id} for user {user_id}")
        return session

    async def validate_session(self, token: str) -> Optional[UserSession]:
        """
        Active session backing this token, or None.

        Not found, revoked and expired all yield None.

        Raises:
            SessionStoreError: the store could not be queried
        """
        return await self.uow.sessions.find_active_by_token_hash(fingerprint(token))

    async def revoke_session(self, token: str) -> bool:
        """Revoke the session backing this token. False if it was not active."""
        revoked = await self.uow.sessions.revoke_by_token_hash(fingerprint(token))
        if revoked:
            logger.info("Session revoked by logout")
        return revoked

    async def revoke_all_sessions(self, user_id: UUID) -> int:
        """Revoke every active session of a user (credential changes)"""
        count = await self.uow.sessions.revoke_all_active(user_id)
        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return count

    async def update_session(
        self, old_token: str, new_token: str, new_expires_at: datetime
    ) -> UserSession:
        """
        Move the session from old_token to new_token in place.

        The caller must have validated old_token first.

        Raises:
            SessionNotFoundError: the session was revoked in the meantime
            SessionStoreError: the store could not be updated
        """
        session = await self.uow.sessions.update_token_hash_and_expiry(
            fingerprint(old_token), fingerprint(new_token), new_expires_at
        )
        logger.info(f"Refreshed session {session.id}")
        return session
