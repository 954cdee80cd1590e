"""
Refresh Token Use Case

Issues a new access token for the caller's session and rotates the session
row onto it.
"""

import logging

from libs.result import Error, Result, Return
from src.api.utils.jwt import TokenClaims, TokenCodec
from src.app.repositories.session_repository import (
    SessionNotFoundError,
    SessionStoreError,
)
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import Principal
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing the access token.

    Business Rules:
    - The current session is re-validated even though the gate checked it
    - New token carries the same identity claims and a fresh expiry
    - Session row keeps its id; fingerprint and expiry are replaced
    - Old token stops working as soon as the update commits
    - Losing a race with logout or a new login reads as SESSION_REVOKED
    """

    def __init__(self, uow: UnitOfWork, codec: TokenCodec, token_ttl: int):
        self.uow = uow
        self.codec = codec
        self.token_ttl = token_ttl

    async def execute(self, principal: Principal, token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            principal: Caller identity from the authentication gate
            token: The caller's current bearer token

        Returns:
            Result with RefreshTokenResponse, or Error SESSION_REVOKED /
            TOKEN_REFRESH_FAILED
        """
        async with self.uow:
            sessions = SessionManager(self.uow)
            try:
                current = await sessions.validate_session(token)
                if current is None:
                    return Return.err(
                        Error("SESSION_REVOKED", "Session invalid or expired")
                    )

                issued = self.codec.sign(
                    TokenClaims(
                        user_id=principal.user_id,
                        role=principal.role,
                        college_id=principal.college_id,
                        year=principal.year,
                    ),
                    self.token_ttl,
                )

                await sessions.update_session(token, issued.token, issued.expires_at)
                await self.uow.commit()
            except SessionNotFoundError:
                return Return.err(Error("SESSION_REVOKED", "Session invalid or expired"))
            except SessionStoreError:
                logger.error("Token refresh failed", exc_info=True)
                return Return.err(Error("TOKEN_REFRESH_FAILED", "Failed to refresh token"))

            return Return.ok(RefreshTokenResponse(token=issued.token))
