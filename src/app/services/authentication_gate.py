"""
Authentication Gate

Per-request check: token codec first (stateless), then session store
(stateful). Produces an AuthContext or a rejection. Performs no writes.
"""

import logging
from enum import Enum
from typing import Optional

from libs.result import Error, Result, Return
from src.api.utils.jwt import TokenCodec
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import ANONYMOUS, AuthContext, Principal

logger = logging.getLogger(__name__)


class AuthFailure(str, Enum):
    """Why a request failed authentication (internal)"""

    missing_token = "missing_token"
    malformed_token = "malformed_token"
    expired_token = "expired_token"
    inactive_session = "inactive_session"
    store_unavailable = "store_unavailable"

    def to_error(self) -> Error:
        """Narrow to the externally visible error"""
        code, message = _EXTERNAL_ERRORS[self]
        return Error(code, message)


_EXTERNAL_ERRORS = {
    AuthFailure.missing_token: ("NO_TOKEN", "Access token required"),
    AuthFailure.malformed_token: ("INVALID_TOKEN", "Invalid token"),
    AuthFailure.expired_token: ("TOKEN_EXPIRED", "Token expired"),
    # Not found, revoked and expired sessions are indistinguishable outside
    AuthFailure.inactive_session: ("SESSION_REVOKED", "Session invalid or expired"),
    AuthFailure.store_unavailable: (
        "SESSION_VALIDATION_FAILED",
        "Session validation failed",
    ),
}

_CODEC_FAILURES = {
    "INVALID_TOKEN": AuthFailure.malformed_token,
    "TOKEN_EXPIRED": AuthFailure.expired_token,
}


class AuthenticationGate:
    """Mandatory and optional authentication of a bearer token"""

    def __init__(self, codec: TokenCodec, uow: UnitOfWork):
        self.codec = codec
        self.uow = uow

    async def authenticate(self, token: Optional[str]) -> Result[AuthContext]:
        """
        Authenticate a bearer token.

        Returns:
            Result with AuthContext, or Error NO_TOKEN / INVALID_TOKEN /
            TOKEN_EXPIRED / SESSION_REVOKED / SESSION_VALIDATION_FAILED
        """
        outcome = await self._check(token)
        if isinstance(outcome, AuthFailure):
            logger.debug(f"Authentication rejected: {outcome.value}")
            return Return.err(outcome.to_error())
        return Return.ok(outcome)

    async def authenticate_optional(self, token: Optional[str]) -> AuthContext:
        """Same checks, but any failure yields the anonymous principal"""
        outcome = await self._check(token)
        if isinstance(outcome, AuthFailure):
            if outcome is AuthFailure.store_unavailable:
                logger.warning("Session store unavailable, treating caller as anonymous")
            return AuthContext(principal=ANONYMOUS)
        return outcome

    async def _check(self, token: Optional[str]):
        if not token:
            return AuthFailure.missing_token

        verified = self.codec.verify(token)
        if verified.is_err():
            return _CODEC_FAILURES.get(verified.error.code, AuthFailure.malformed_token)

        async with self.uow:
            try:
                session = await SessionManager(self.uow).validate_session(token)
            except SessionStoreError:
                logger.error("Session validation failed", exc_info=True)
                return AuthFailure.store_unavailable

        if session is None:
            return AuthFailure.inactive_session

        claims = verified.value.claims
        principal = Principal(
            user_id=claims.user_id,
            role=claims.role,
            college_id=claims.college_id,
            year=claims.year,
        )
        return AuthContext(principal=principal, token=token)
