"""
Session Maintenance

Offline cleanup of session rows. Never called on the request path.
"""

import logging
from datetime import timedelta
from typing import Dict

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class SessionMaintenanceService:
    """Deletes old, expired and revoked session rows and reports counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def cleanup_old_sessions(self, days_old: int = 30) -> int:
        """Delete sessions created more than days_old days ago"""
        cutoff = utcnow() - timedelta(days=days_old)
        async with self.uow:
            count = await self.uow.sessions.delete_created_before(cutoff)
            await self.uow.commit()
        logger.info(f"Cleaned up {count} sessions older than {days_old} days")
        return count

    async def cleanup_expired_sessions(self) -> int:
        """Delete sessions that have expired"""
        async with self.uow:
            count = await self.uow.sessions.delete_expired(utcnow())
            await self.uow.commit()
        logger.info(f"Cleaned up {count} expired sessions")
        return count

    async def cleanup_revoked_sessions(self, days_old: int = 7) -> int:
        """Delete revoked sessions created more than days_old days ago"""
        cutoff = utcnow() - timedelta(days=days_old)
        async with self.uow:
            count = await self.uow.sessions.delete_created_before(cutoff, revoked_only=True)
            await self.uow.commit()
        logger.info(f"Cleaned up {count} revoked sessions older than {days_old} days")
        return count

    async def get_session_stats(self) -> Dict[str, int]:
        """Counts of total, active, revoked and expired sessions"""
        async with self.uow:
            return await self.uow.sessions.get_stats(utcnow())
