"""
Token Codec

Stateless signing and verification of bearer access tokens. No I/O.
"""

import time
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional, Union
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from libs.result import Error, Result, Return
from src.domain.base import from_epoch
from src.domain.entities import UserRole


class TokenClaims(BaseModel):
    """Identity claims carried by an access token"""

    user_id: UUID
    role: UserRole
    college_id: Optional[UUID] = None
    year: Optional[str] = None


class IssuedToken(BaseModel):
    """A freshly signed token and the instants embedded in it"""

    token: str
    issued_at: datetime
    expires_at: datetime


class VerifiedToken(BaseModel):
    """Claims of a token whose signature and expiry checked out"""

    claims: TokenClaims
    issued_at: int
    expires_at: int
    jti: Optional[str] = None


class TokenCodec:
    """
    HS256 JWT codec.

    Expiry is an integer Unix-epoch ``exp`` claim and a token is rejected
    once ``exp <= now``. No leeway is applied.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.clock = clock

    def sign(self, claims: TokenClaims, ttl: Union[int, timedelta]) -> IssuedToken:
        """
        Sign claims into a token expiring ``ttl`` from now.

        Args:
            claims: Identity claims
            ttl: Lifetime in seconds or as a timedelta

        Returns:
            IssuedToken whose expires_at matches the exp claim to the second
        """
        if isinstance(ttl, timedelta):
            ttl = int(ttl.total_seconds())
        now = int(self.clock())
        expires_at = now + int(ttl)
        payload = {
            "user_id": str(claims.user_id),
            "role": claims.role.value,
            "college_id": str(claims.college_id) if claims.college_id else None,
            "year": claims.year,
            "iat": now,
            "exp": expires_at,
            # Distinguishes tokens issued for the same identity in the same second
            "jti": uuid.uuid4().hex,
        }
        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)
        return IssuedToken(
            token=token,
            issued_at=from_epoch(now),
            expires_at=from_epoch(expires_at),
        )

    def verify(self, token: str, now: Optional[int] = None) -> Result[VerifiedToken]:
        """
        Verify signature, then expiry.

        Returns:
            Result with VerifiedToken, or Error INVALID_TOKEN (malformed or
            bad signature) / TOKEN_EXPIRED (valid signature, exp <= now)
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        exp = payload.get("exp")
        if not isinstance(exp, int) or isinstance(exp, bool):
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        if now is None:
            now = int(self.clock())
        if exp <= now:
            return Return.err(Error("TOKEN_EXPIRED", "Token expired"))

        try:
            claims = TokenClaims(
                user_id=payload.get("user_id"),
                role=payload.get("role"),
                college_id=payload.get("college_id"),
                year=payload.get("year"),
            )
        except ValidationError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        return Return.ok(
            VerifiedToken(
                claims=claims,
                issued_at=int(payload.get("iat", 0)),
                expires_at=exp,
                jti=payload.get("jti"),
            )
        )
