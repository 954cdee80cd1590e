"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, logout, refresh
- users/: Profile and credential lifecycle
- colleges/: Tenant management
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
)
from .users import (
    LoadProfileUseCase,
    ChangePasswordUseCase,
    DeactivateUserUseCase,
)
from .colleges import (
    CreateCollegeUseCase,
    GetCollegeUseCase,
    ListCollegesUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    # Users
    "LoadProfileUseCase",
    "ChangePasswordUseCase",
    "DeactivateUserUseCase",
    # Colleges
    "CreateCollegeUseCase",
    "GetCollegeUseCase",
    "ListCollegesUseCase",
]
