"""
Deactivate User Use Case

Soft-deactivates an account and ends its sessions.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.authorization import can_access_college
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from src.domain.principal import Principal

logger = logging.getLogger(__name__)


class DeactivateUserUseCase:
    """
    Use case for deactivating a user.

    Business Rules:
    - super_admin may deactivate anyone except themselves
    - college_admin may deactivate students of their own college only
    - Users are never deleted; is_active is cleared
    - All active sessions of the user are revoked
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, target_user_id: UUID, requester: Principal) -> Result[dict]:
        """
        Execute deactivate use case.

        Args:
            target_user_id: User to deactivate
            requester: Authenticated caller

        Returns:
            Result with revoked session count, or Error
        """
        if target_user_id == requester.user_id:
            return Return.err(Error("CANNOT_DEACTIVATE_SELF", "You cannot deactivate yourself"))

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if requester.role == UserRole.college_admin:
                if user.role != UserRole.student or not can_access_college(
                    requester, user.college_id
                ):
                    return Return.err(
                        Error("FORBIDDEN", "College admins can only deactivate their own students")
                    )
            elif requester.role != UserRole.super_admin:
                return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

            user.is_active = False
            await self.uow.users.update(user)

            try:
                revoked = await SessionManager(self.uow).revoke_all_sessions(target_user_id)
            except SessionStoreError:
                logger.error(
                    f"Session revocation failed for user {target_user_id}", exc_info=True
                )
                return Return.err(
                    Error("SESSION_REVOCATION_FAILED", "Failed to revoke sessions")
                )

            await self.uow.commit()

            logger.info(f"User {target_user_id} deactivated by {requester.user_id}")

            return Return.ok({"user_id": str(target_user_id), "revoked_sessions": revoked})
