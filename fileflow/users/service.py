
import logging
from fileflow.auth.roles import ADMIN_ROLES, SUPERADMIN_ROLES, authorize
from fileflow.errors import NotFound, ValidationError
from fileflow.schemas.enums import Role
from fileflow.schemas.records import UserRecord
from fileflow.storage.base import Storage

logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = (Role.USER.value, Role.ADMIN.value)

def list_users(storage: Storage, caller: UserRecord) -> list[UserRecord]:
    authorize(caller, ADMIN_ROLES)
    return storage.list_users()

def set_user_role(storage: Storage, user_id: str, role: str, caller: UserRecord) -> UserRecord:
    authorize(caller, SUPERADMIN_ROLES)
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError("Invalid role")
    updated = storage.update_user(user_id, role=role)
    if updated is None:
        raise NotFound("User not found")
    logger.info("User %s set to role %s by %s", user_id, role, caller.id)
    return updated
