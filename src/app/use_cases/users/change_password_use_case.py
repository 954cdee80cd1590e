"""
Change Password Use Case

Sets a new password for a user and ends every session they hold.
"""

import logging
from uuid import UUID

import bcrypt

from libs.result import Error, Result, Return
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for an administrative password change.

    Business Rules:
    - New password stored as bcrypt hash
    - All active sessions of the user are revoked in the same transaction
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, user_id: UUID, new_password: str) -> Result[dict]:
        """
        Execute change password use case.

        Args:
            user_id: User whose password changes
            new_password: Plain text new password

        Returns:
            Result with revoked session count, or Error USER_NOT_FOUND /
            SESSION_REVOCATION_FAILED (nothing is changed)
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            password_hash = bcrypt.hashpw(
                new_password.encode("utf-8"), bcrypt.gensalt(self.bcrypt_rounds)
            )
            user.password_hash = password_hash.decode("utf-8")
            await self.uow.users.update(user)

            try:
                revoked = await SessionManager(self.uow).revoke_all_sessions(user_id)
            except SessionStoreError:
                logger.error(f"Session revocation failed for user {user_id}", exc_info=True)
                return Return.err(
                    Error("SESSION_REVOCATION_FAILED", "Failed to revoke sessions")
                )

            await self.uow.commit()

            logger.info(f"Password changed for user {user_id}")
            return Return.ok({"user_id": str(user_id), "revoked_sessions": revoked})
