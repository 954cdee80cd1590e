"""
Register Use Case

Self-registration of student and individual user accounts.
"""

import logging
from uuid import UUID

import bcrypt

from libs.result import Error, Result, Return
from src.api.utils.jwt import TokenClaims, TokenCodec
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_manager import SessionManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from .dtos import AuthTokenResponse, RegisterCommand, UserInfo

logger = logging.getLogger(__name__)

SELF_REGISTRATION_ROLES = (UserRole.student, UserRole.user)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthTokenResponse]

    Business Logic:
    1. Only student and individual user accounts can self-register
    2. super_admin/user must not carry a college; college_admin/student must
    3. Students need a student ID
    4. Referenced college must exist
    5. Email must be unused
    6. Hash password with bcrypt
    7. Open the first session and return its token
    """

    def __init__(self, uow: UnitOfWork, codec: TokenCodec, token_ttl: int, bcrypt_rounds: int = 12):
        self.uow = uow
        self.codec = codec
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(self, command: RegisterCommand) -> Result[AuthTokenResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand

        Returns:
            Result[AuthTokenResponse] or Error
        """
        role = command.role

        if role not in SELF_REGISTRATION_ROLES:
            return Return.err(
                Error("ROLE_NOT_ALLOWED", f"Role {role.value} cannot self-register")
            )

        if not role.requires_college and command.college_id:
            return Return.err(
                Error(
                    "INVALID_ROLE_COLLEGE_COMBO",
                    "Super admin and user roles cannot be associated with a college",
                )
            )

        if role.requires_college and not command.college_id:
            return Return.err(
                Error(
                    "COLLEGE_REQUIRED",
                    "College admin and student roles require a college association",
                )
            )

        if role == UserRole.student and not command.student_id:
            return Return.err(
                Error("STUDENT_ID_REQUIRED", "Student role requires a student ID")
            )

        async with self.uow:
            college_id = None
            if command.college_id:
                try:
                    college_id = UUID(command.college_id)
                except ValueError:
                    return Return.err(Error("COLLEGE_NOT_FOUND", "College not found"))
                college = await self.uow.colleges.get_by_id(college_id)
                if college is None or not college.is_active:
                    return Return.err(Error("COLLEGE_NOT_FOUND", "College not found"))

            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "User with this email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(self.bcrypt_rounds)
            )

            user = User(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                full_name=command.full_name,
                role=role,
                college_id=college_id,
                student_id=command.student_id,
                year=command.year,
            )
            user = await self.uow.users.create(user)
            # Committed on its own: the session protocol may roll back its transaction
            await self.uow.commit()

            user_id = user.id
            user_info = UserInfo.from_user(user)
            issued = self.codec.sign(
                TokenClaims(
                    user_id=user_id,
                    role=role,
                    college_id=college_id,
                    year=command.year,
                ),
                self.token_ttl,
            )

            try:
                await SessionManager(self.uow).create_session(
                    user_id, issued.token, issued.expires_at
                )
                await self.uow.commit()
            except SessionStoreError:
                logger.error(f"Session creation failed for new user {user_id}", exc_info=True)
                return Return.err(
                    Error("SESSION_CREATION_FAILED", "Failed to create session")
                )

            return Return.ok(AuthTokenResponse(token=issued.token, user=user_info))
