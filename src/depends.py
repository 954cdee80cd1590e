from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Result
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import AuthenticationError, ClientError, ServerError
from src.api.utils.jwt import TokenCodec
from src.app.services.authentication_gate import AuthenticationGate
from src.app.services.authorization import authorize_permission, authorize_roles
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from src.domain.principal import AuthContext

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Missing header or a non-Bearer scheme yields None instead of a 403
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec() -> TokenCodec:
    return TokenCodec(ApplicationConfig.JWT_SECRET, ApplicationConfig.JWT_ALGORITHM)


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


async def authenticate(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthContext:
    """
    Authentication gate for protected routes.

    Verifies the bearer token, then checks its session is still active.

    Returns:
        AuthContext with the caller's principal and raw token

    Raises:
        AuthenticationError: 401 NO_TOKEN, INVALID_TOKEN, TOKEN_EXPIRED, SESSION_REVOKED
        ServerError: 500 SESSION_VALIDATION_FAILED
    """
    gate = AuthenticationGate(codec, uow)
    result = await gate.authenticate(_bearer_token(credentials))

    if result.is_err():
        error = result.error
        if error.code == "SESSION_VALIDATION_FAILED":
            raise ServerError(error)
        raise AuthenticationError(error)

    return result.value


async def authenticate_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthContext:
    """
    Optional authentication for routes that personalize but never require auth.

    Any failure yields the anonymous principal. Not for privileged actions.
    """
    gate = AuthenticationGate(codec, uow)
    return await gate.authenticate_optional(_bearer_token(credentials))


def _raise_for_authorization(result: Result) -> None:
    if result.is_err():
        error = result.error
        if error.code == "NO_AUTH":
            raise AuthenticationError(error)
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)


def require_roles(*roles: UserRole):
    """Dependency factory: authenticated caller must hold one of roles"""

    async def dependency(context: AuthContext = Depends(authenticate)) -> AuthContext:
        _raise_for_authorization(authorize_roles(context.principal, roles))
        return context

    return dependency


def require_permission(resource: str, action: str):
    """Dependency factory: caller's role must grant action on resource"""

    async def dependency(context: AuthContext = Depends(authenticate)) -> AuthContext:
        _raise_for_authorization(authorize_permission(context.principal, resource, action))
        return context

    return dependency


async def require_college_access(
    college_id: UUID, context: AuthContext = Depends(authenticate)
) -> AuthContext:
    """Caller must be super_admin or belong to the college in the path"""
    _raise_for_authorization(
        authorize_roles(context.principal, tuple(UserRole), college_id=college_id)
    )
    return context
