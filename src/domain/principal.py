"""
Request-scoped identity

Principal and AuthContext are built per request by the authentication gate
and handed to handlers explicitly. They are never persisted.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from .entities.enums import UserRole


class Principal(BaseModel):
    """Authenticated identity, role and tenant of the caller"""

    user_id: Optional[UUID] = None
    role: Optional[UserRole] = None
    college_id: Optional[UUID] = None
    year: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = Principal()


class AuthContext(BaseModel):
    """Principal plus the raw bearer token it was derived from"""

    principal: Principal
    token: Optional[str] = None
