
from fastapi import APIRouter, Depends
from fileflow.auth.deps import get_storage, require_roles
from fileflow.auth.roles import ADMIN_ROLES, SUPERADMIN_ROLES
from fileflow.schemas.admin import RoleUpdate, MessageOut
from fileflow.schemas.auth import UserListItem
from fileflow.schemas.records import UserRecord
from fileflow.storage.base import Storage
from fileflow.users import service

router = APIRouter(prefix="/api/users", tags=["users"])

@router.get("", response_model=list[UserListItem])
def list_users(storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*ADMIN_ROLES))):
    return [UserListItem.model_validate(u.model_dump()) for u in service.list_users(storage, user)]

@router.patch("/{user_id}/role", response_model=MessageOut)
def update_role(user_id: str, body: RoleUpdate, storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*SUPERADMIN_ROLES))):
    service.set_user_role(storage, user_id, body.role, user)
    return MessageOut(message="User role updated successfully")
