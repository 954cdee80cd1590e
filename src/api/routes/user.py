from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import ChangePasswordUseCase, DeactivateUserUseCase
from src.depends import get_unit_of_work, require_roles
from src.domain.entities import UserRole
from src.domain.principal import AuthContext

router = APIRouter(prefix="/users", tags=["User"])


class ChangePasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=6, description="New password (min 6 chars)")


class CredentialChangeResponse(BaseModel):
    """Response for operations that end a user's sessions"""

    message: str
    user_id: str
    revoked_sessions: int


def _raise_for_error(error):
    if error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code == "FORBIDDEN":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "CANNOT_DEACTIVATE_SELF":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.put(
    "/{user_id}/password",
    status_code=status.HTTP_200_OK,
    response_model=CredentialChangeResponse,
)
async def change_password(
    user_id: UUID,
    request: ChangePasswordRequest,
    context: AuthContext = Depends(require_roles(UserRole.super_admin)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password (super_admin)

    Every active session of the user is revoked with the password change.

    Raises:
        - 403 Forbidden: Caller is not super_admin
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS)
    result = await use_case.execute(user_id, request.new_password)

    if result.is_err():
        _raise_for_error(result.error)

    return CredentialChangeResponse(message="Password updated successfully", **result.value)


@router.put(
    "/{user_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=CredentialChangeResponse,
)
async def deactivate_user(
    user_id: UUID,
    context: AuthContext = Depends(
        require_roles(UserRole.super_admin, UserRole.college_admin)
    ),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate User

    super_admin may deactivate any other user; college_admin only students of
    their own college. The user's sessions are revoked and login is refused
    from then on.

    Raises:
        - 400 Bad Request: Caller targeted themselves
        - 403 Forbidden: Insufficient permissions
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    use_case = DeactivateUserUseCase(uow)
    result = await use_case.execute(user_id, context.principal)

    if result.is_err():
        _raise_for_error(result.error)

    return CredentialChangeResponse(message="User deactivated successfully", **result.value)
