"""
Role Authorization Gate

Pure checks of an authenticated principal against a route requirement.
"""

from typing import Dict, FrozenSet, Iterable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.domain.entities import UserRole
from src.domain.principal import Principal

WILDCARD = "*"

# (role, resource) -> allowed actions
PERMISSIONS: Dict[UserRole, Dict[str, FrozenSet[str]]] = {
    UserRole.super_admin: {
        WILDCARD: frozenset({WILDCARD}),
    },
    UserRole.college_admin: {
        "colleges": frozenset({"read"}),
        "students": frozenset({"create", "read", "update", "delete"}),
        "books": frozenset({"create", "read", "update", "delete"}),
        "advertisements": frozenset({"create", "read", "update", "delete"}),
    },
    UserRole.student: {
        "books": frozenset({"read"}),
        "profile": frozenset({"read", "update"}),
    },
    UserRole.user: {
        "books": frozenset({"read"}),
        "profile": frozenset({"read", "update"}),
    },
}


def has_permission(role: UserRole, resource: str, action: str) -> bool:
    """Whether role may perform action on resource"""
    grants = PERMISSIONS.get(role, {})
    for key in (resource, WILDCARD):
        actions = grants.get(key, frozenset())
        if action in actions or WILDCARD in actions:
            return True
    return False


def _require_principal(principal: Optional[Principal]) -> Optional[Error]:
    if principal is None or principal.is_anonymous:
        return Error("NO_AUTH", "Authentication required")
    return None


def authorize_roles(
    principal: Optional[Principal],
    allowed_roles: Iterable[UserRole],
    college_id: Optional[UUID] = None,
) -> Result[Principal]:
    """
    Check role membership and, for college-scoped resources, tenant match.

    Args:
        principal: Caller, None if unauthenticated
        allowed_roles: Roles admitted by the route
        college_id: Owning college of the resource; None means global

    Returns:
        Result with the principal, or Error NO_AUTH / FORBIDDEN
    """
    error = _require_principal(principal)
    if error:
        return Return.err(error)

    if principal.role not in set(allowed_roles):
        return Return.err(Error("FORBIDDEN", "Insufficient permissions"))

    if not can_access_college(principal, college_id):
        return Return.err(Error("FORBIDDEN", "Access denied to this college"))

    return Return.ok(principal)


def authorize_permission(
    principal: Optional[Principal], resource: str, action: str
) -> Result[Principal]:
    """Check the permission table for (role, resource, action)"""
    error = _require_principal(principal)
    if error:
        return Return.err(error)

    if not has_permission(principal.role, resource, action):
        return Return.err(
            Error("PERMISSION_DENIED", f"Permission denied: {action} on {resource}")
        )
    return Return.ok(principal)


def can_access_college(principal: Principal, college_id: Optional[UUID]) -> bool:
    """super_admin sees every college; everyone else only their own"""
    if college_id is None or principal.role == UserRole.super_admin:
        return True
    return principal.college_id == college_id
