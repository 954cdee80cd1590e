from uuid import uuid4

import pytest

from src.app.services.authorization import (
    authorize_permission,
    authorize_roles,
    can_access_college,
    has_permission,
)
from src.domain.entities import UserRole
from src.domain.principal import ANONYMOUS, Principal


def principal(role, college_id=None):
    return Principal(user_id=uuid4(), role=role, college_id=college_id)


@pytest.mark.parametrize(
    "role,resource,action,allowed",
    [
        (UserRole.super_admin, "sessions", "read", True),
        (UserRole.super_admin, "anything", "delete", True),
        (UserRole.college_admin, "students", "create", True),
        (UserRole.college_admin, "colleges", "read", True),
        (UserRole.college_admin, "colleges", "create", False),
        (UserRole.college_admin, "sessions", "read", False),
        (UserRole.student, "books", "read", True),
        (UserRole.student, "books", "delete", False),
        (UserRole.user, "profile", "update", True),
        (UserRole.user, "students", "read", False),
    ],
)
def test_permission_table(role, resource, action, allowed):
    assert has_permission(role, resource, action) is allowed


def test_authorize_roles_requires_principal():
    assert authorize_roles(None, [UserRole.student]).error.code == "NO_AUTH"
    assert authorize_roles(ANONYMOUS, [UserRole.student]).error.code == "NO_AUTH"


def test_authorize_roles_rejects_role_outside_allowed_set():
    result = authorize_roles(principal(UserRole.student), [UserRole.super_admin])

    assert result.error.code == "FORBIDDEN"


def test_authorize_roles_rejects_other_tenant():
    caller = principal(UserRole.college_admin, college_id=uuid4())

    result = authorize_roles(caller, [UserRole.college_admin], college_id=uuid4())

    assert result.error.code == "FORBIDDEN"


def test_authorize_roles_accepts_own_tenant():
    college_id = uuid4()
    caller = principal(UserRole.student, college_id=college_id)

    result = authorize_roles(caller, [UserRole.student], college_id=college_id)

    assert result.is_ok()
    assert result.value is caller


def test_super_admin_crosses_tenants():
    caller = principal(UserRole.super_admin)

    assert can_access_college(caller, uuid4())
    assert authorize_roles(caller, [UserRole.super_admin], college_id=uuid4()).is_ok()


def test_global_resources_visible_to_everyone():
    assert can_access_college(principal(UserRole.user), None)


def test_authorize_permission():
    assert authorize_permission(principal(UserRole.student), "books", "read").is_ok()
    assert (
        authorize_permission(principal(UserRole.student), "books", "create").error.code
        == "PERMISSION_DENIED"
    )
    assert authorize_permission(ANONYMOUS, "books", "read").error.code == "NO_AUTH"
