"""Role checks used before every privileged operation.

Roles form a fixed hierarchy: user < admin < superadmin.
"""
from typing import Iterable

from fileflow.errors import Forbidden
from fileflow.schemas.enums import Role
from fileflow.schemas.records import UserRecord

ROLE_RANK = {Role.USER.value: 0, Role.ADMIN.value: 1, Role.SUPERADMIN.value: 2}


def roles_at_least(role: Role | str) -> frozenset[str]:
    """All roles ranked at or above ``role``."""
    floor = ROLE_RANK[Role(role).value]
    return frozenset(name for name, rank in ROLE_RANK.items() if rank >= floor)


ADMIN_ROLES = roles_at_least(Role.ADMIN)
SUPERADMIN_ROLES = roles_at_least(Role.SUPERADMIN)


def _names(roles: Iterable[Role | str]) -> set[str]:
    return {Role(r).value for r in roles}


def authorize(user: UserRecord, allowed_roles: Iterable[Role | str]) -> None:
    if user.role not in _names(allowed_roles):
        raise Forbidden("Insufficient permissions")


def authorize_owner_or_role(user: UserRecord, owner_id: str, allowed_roles: Iterable[Role | str]) -> None:
    if user.id == owner_id:
        return
    if user.role not in _names(allowed_roles):
        raise Forbidden("Access denied")
