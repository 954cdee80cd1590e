"""
Login Use Case

Verifies credentials and opens the user's single active session.
"""

import logging

import bcrypt

from libs.result import Error, Result, Return
from src.api.utils.jwt import TokenClaims, TokenCodec
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import UserRole
from .dtos import AuthTokenResponse, UserInfo

logger = logging.getLogger(__name__)

# Checked against when the email is unknown so both paths cost one bcrypt round
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email, wrong password and inactive account share one error
    - All prior sessions of the user are revoked before the new one is stored
    - Session expiry equals the token's exp claim
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork, codec: TokenCodec, token_ttl: int):
        self.uow = uow
        self.codec = codec
        self.token_ttl = token_ttl

    async def execute(self, email: str, password: str) -> Result[AuthTokenResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthTokenResponse, or Error INVALID_CREDENTIALS /
            SESSION_CREATION_FAILED
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            password_valid = bcrypt.checkpw(
                password.encode(), user.password_hash.encode()
            )
            if not password_valid or not user.is_active:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            # Snapshot before any write: a failed revoke rolls back and
            # expires loaded instances
            user_id = user.id
            user_info = UserInfo.from_user(user)
            claims = TokenClaims(
                user_id=user.id,
                role=UserRole(user.role),
                college_id=user.college_id,
                year=user.year,
            )

            issued = self.codec.sign(claims, self.token_ttl)

            try:
                await SessionManager(self.uow).create_session(
                    user_id, issued.token, issued.expires_at
                )
                logged_in_at = utcnow()
                await self.uow.users.touch_last_login(user_id, logged_in_at)
                await self.uow.commit()
            except SessionStoreError:
                logger.error(f"Session creation failed for user {user_id}", exc_info=True)
                return Return.err(
                    Error("SESSION_CREATION_FAILED", "Failed to create session")
                )

            user_info.last_login_at = logged_in_at
            return Return.ok(AuthTokenResponse(token=issued.token, user=user_info))
