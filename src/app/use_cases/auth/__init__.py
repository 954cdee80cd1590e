"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .dtos import (
    RegisterCommand,
    UserInfo,
    AuthTokenResponse,
    RefreshTokenResponse,
    LogoutResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthTokenResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    # DTOs - Nested Models
    "UserInfo",
]
