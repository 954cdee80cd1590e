from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import AuthenticationError, ClientError, ServerError
from src.api.utils.jwt import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthTokenResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    UserInfo,
)
from src.app.use_cases.users import LoadProfileUseCase
from src.depends import authenticate, get_token_codec, get_unit_of_work
from src.domain.entities import UserRole
from src.domain.principal import AuthContext

router = APIRouter(prefix="/auth", tags=["Authentication"])

REGISTER_VALIDATION_ERRORS = (
    "INVALID_ROLE_COLLEGE_COMBO",
    "COLLEGE_REQUIRED",
    "STUDENT_ID_REQUIRED",
    "COLLEGE_NOT_FOUND",
)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="User password (min 6 chars)")
    full_name: str = Field(..., min_length=1, max_length=255, description="Full name")
    role: UserRole = Field(UserRole.student, description="student or user")
    college_id: Optional[str] = Field(None, description="College the account belongs to")
    student_id: Optional[str] = Field(None, max_length=64, description="Student ID")
    year: Optional[str] = Field(None, max_length=32, description="Academic year")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthTokenResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Registration

    Creates a student or individual user account and opens its first session.

    Raises:
        - 400 Bad Request: Role/college combination invalid, college unknown,
          student ID missing
        - 403 Forbidden: Role cannot self-register
        - 409 Conflict: Email already exists
        - 500 Internal Server Error: Session could not be created
    """
    command = RegisterCommand(**request.model_dump())

    use_case = RegisterUseCase(
        uow,
        codec,
        ApplicationConfig.JWT_EXPIRES_IN_SECONDS,
        bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS,
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in REGISTER_VALIDATION_ERRORS:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ROLE_NOT_ALLOWED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthTokenResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Login

    Verifies credentials, revokes every prior session of the user and opens
    a new one. Only the newest login stays valid.

    Raises:
        - 401 Unauthorized: Invalid credentials or inactive account
        - 500 Internal Server Error: Session could not be created
    """
    use_case = LoginUseCase(uow, codec, ApplicationConfig.JWT_EXPIRES_IN_SECONDS)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    context: AuthContext = Depends(authenticate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Logout

    Revokes the current session. Idempotent: always succeeds once the caller
    got past authentication.
    """
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(context.token)
    return result.value


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    context: AuthContext = Depends(authenticate),
    uow: UnitOfWork = Depends(get_unit_of_work),
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Refresh Token

    Issues a token with the same claims and a fresh expiry, moving the current
    session onto it. The old token stops working immediately.

    Raises:
        - 401 Unauthorized: Session revoked or expired since authentication
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, codec, ApplicationConfig.JWT_EXPIRES_IN_SECONDS)
    result = await use_case.execute(context.principal, context.token)

    if result.is_err():
        error = result.error
        if error.code == "SESSION_REVOKED":
            raise AuthenticationError(error)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def me(
    context: AuthContext = Depends(authenticate),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Profile

    Raises:
        - 404 Not Found: User no longer exists
    """
    use_case = LoadProfileUseCase(uow)
    result = await use_case.execute(context.principal.user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
