
from fastapi import APIRouter, Depends
from fileflow.auth.deps import get_storage, get_current_user, require_roles
from fileflow.auth.roles import ADMIN_ROLES, SUPERADMIN_ROLES
from fileflow.schemas.admin import DashboardStats, AdminStats, SuperAdminStats
from fileflow.schemas.records import UserRecord
from fileflow.stats import service
from fileflow.storage.base import Storage

router = APIRouter(prefix="/api/stats", tags=["stats"])

@router.get("/dashboard", response_model=DashboardStats)
def dashboard(storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.dashboard_stats(storage, user)

@router.get("/admin", response_model=AdminStats)
def admin(storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*ADMIN_ROLES))):
    return service.admin_stats(storage, user)

@router.get("/superadmin", response_model=SuperAdminStats)
def superadmin(storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*SUPERADMIN_ROLES))):
    return service.superadmin_stats(storage, user)
