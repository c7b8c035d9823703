
from fastapi import APIRouter, Depends
from fileflow.admin_requests import service
from fileflow.auth.deps import get_storage, get_current_user, require_roles
from fileflow.auth.roles import SUPERADMIN_ROLES
from fileflow.schemas.admin import AdminRequestCreate, MessageOut
from fileflow.schemas.records import AdminRequestRecord, UserRecord
from fileflow.storage.base import Storage

router = APIRouter(prefix="/api/admin-requests", tags=["admin-requests"])

@router.post("", response_model=AdminRequestRecord)
def create_request(body: AdminRequestCreate, storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.request_promotion(storage, user, body.message)

@router.get("/pending", response_model=list[AdminRequestRecord])
def pending_requests(storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*SUPERADMIN_ROLES))):
    return service.list_pending_requests(storage, user)

@router.patch("/{request_id}/approve", response_model=MessageOut)
def approve_request(request_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*SUPERADMIN_ROLES))):
    service.approve_request(storage, request_id, user)
    return MessageOut(message="User promoted to admin successfully")

@router.patch("/{request_id}/deny", response_model=AdminRequestRecord)
def deny_request(request_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*SUPERADMIN_ROLES))):
    return service.deny_request(storage, request_id, user)
