"""
User Management Use Cases

All user-related business logic.
"""

from .load_profile_use_case import LoadProfileUseCase
from .change_password_use_case import ChangePasswordUseCase
from .deactivate_user_use_case import DeactivateUserUseCase

__all__ = [
    "LoadProfileUseCase",
    "ChangePasswordUseCase",
    "DeactivateUserUseCase",
]
