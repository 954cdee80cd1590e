"""
Logout Use Case

Revokes the caller's current session.
"""

import logging

from libs.result import Result, Return
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Idempotent: revoking an already revoked session still succeeds
    - A store failure while revoking is logged and logout still succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[LogoutResponse]:
        async with self.uow:
            try:
                revoked = await SessionManager(self.uow).revoke_session(token)
                await self.uow.commit()
            except SessionStoreError:
                logger.warning("Failed to revoke session on logout", exc_info=True)
            else:
                if not revoked:
                    logger.info("Logout for a session that was no longer active")

        return Return.ok(LogoutResponse(message="Logout successful"))
