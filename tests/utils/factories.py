from typing import Optional
from uuid import UUID, uuid4

import bcrypt

from src.domain.entities import College, User, UserRole


def hash_password(password: str) -> str:
    """Cheap bcrypt hash for tests"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode()


def make_user(
    email: str = "student@campus.edu",
    password: str = "Passw0rd!",
    role: UserRole = UserRole.student,
    college_id: Optional[UUID] = None,
    **kwargs,
) -> User:
    if role.requires_college and college_id is None:
        college_id = uuid4()
    if role == UserRole.student:
        kwargs.setdefault("student_id", "S-1001")
    return User(
        id=kwargs.pop("id", uuid4()),
        email=email,
        password_hash=hash_password(password),
        full_name=kwargs.pop("full_name", "Test User"),
        role=role,
        college_id=college_id,
        **kwargs,
    )


def make_college(name: str = "North Campus", code: str = "NC", **kwargs) -> College:
    return College(id=kwargs.pop("id", uuid4()), name=name, code=code, **kwargs)
