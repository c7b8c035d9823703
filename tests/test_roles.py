from datetime import datetime, timezone

import pytest

from fileflow.auth.roles import (
    ADMIN_ROLES, SUPERADMIN_ROLES, authorize, authorize_owner_or_role, roles_at_least,
)
from fileflow.errors import Forbidden
from fileflow.schemas.records import UserRecord


def _user(role, user_id="u1"):
    return UserRecord(id=user_id, email=f"{user_id}@example.com", password_hash="x", name=user_id,
                      role=role, created_at=datetime.now(timezone.utc))


def test_hierarchy():
    assert roles_at_least("user") == {"user", "admin", "superadmin"}
    assert ADMIN_ROLES == {"admin", "superadmin"}
    assert SUPERADMIN_ROLES == {"superadmin"}


@pytest.mark.parametrize("role", ["admin", "superadmin"])
def test_authorize_allows_listed_roles(role):
    authorize(_user(role), ADMIN_ROLES)


def test_authorize_rejects_other_roles():
    with pytest.raises(Forbidden):
        authorize(_user("user"), ADMIN_ROLES)
    with pytest.raises(Forbidden):
        authorize(_user("admin"), SUPERADMIN_ROLES)


def test_owner_passes_regardless_of_role():
    authorize_owner_or_role(_user("user", "owner"), "owner", ADMIN_ROLES)


def test_non_owner_needs_role():
    authorize_owner_or_role(_user("admin", "other"), "owner", ADMIN_ROLES)
    with pytest.raises(Forbidden):
        authorize_owner_or_role(_user("user", "other"), "owner", ADMIN_ROLES)
