from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from src.domain.entities import UserSession


class SessionStoreError(Exception):
    """The session store could not complete an operation"""


class SessionNotFoundError(Exception):
    """No non-revoked session matches the given fingerprint"""


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def insert(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> UserSession:
        """Create a new active session"""
        pass

    @abstractmethod
    async def revoke_all_active(self, user_id: UUID) -> int:
        """Revoke every non-revoked session of a user. Returns count (0 is fine)."""
        pass

    @abstractmethod
    async def revoke_by_token_hash(self, token_hash: str) -> bool:
        """Revoke the non-revoked session with this fingerprint. False if none."""
        pass

    @abstractmethod
    async def find_active_by_token_hash(self, token_hash: str) -> Optional[UserSession]:
        """Session with this fingerprint that is not revoked and not expired"""
        pass

    @abstractmethod
    async def update_token_hash_and_expiry(
        self, old_token_hash: str, new_token_hash: str, new_expires_at: datetime
    ) -> UserSession:
        """Replace fingerprint and expiry of a non-revoked session in place.

        Raises SessionNotFoundError when no non-revoked session matches.
        """
        pass

    @abstractmethod
    async def delete_created_before(
        self, cutoff: datetime, revoked_only: bool = False
    ) -> int:
        """Maintenance: delete sessions created before cutoff. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Maintenance: delete sessions whose expiry is before now. Returns count."""
        pass

    @abstractmethod
    async def get_stats(self, now: datetime) -> Dict[str, int]:
        """Counts of total, active, revoked and expired sessions"""
        pass
