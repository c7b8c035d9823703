"""Aggregate counters for the three dashboards."""
from datetime import datetime, timedelta, timezone
from pathlib import Path

from fileflow.auth.roles import ADMIN_ROLES, SUPERADMIN_ROLES, authorize
from fileflow.schemas.admin import DashboardStats, AdminStats, SuperAdminStats
from fileflow.schemas.enums import FileStatus, Role
from fileflow.schemas.records import FileRecord, UserRecord
from fileflow.storage.base import Storage, utcnow

MONTH = timedelta(days=30)


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def human_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}GB"


def _bytes_on_disk(files: list[FileRecord]) -> int:
    total = 0
    for f in files:
        path = Path(f.storage_path)
        if path.is_file():
            total += path.stat().st_size
    return total


def _count(files: list[FileRecord], status: FileStatus) -> int:
    return sum(1 for f in files if f.status == status.value)


def dashboard_stats(storage: Storage, user: UserRecord) -> DashboardStats:
    files = storage.list_files_by_user(user.id)
    return DashboardStats(
        total_uploads=len(files),
        approved=_count(files, FileStatus.APPROVED),
        pending=_count(files, FileStatus.PENDING),
        rejected=_count(files, FileStatus.REJECTED),
        charts=len(storage.list_charts_by_user(user.id)),
    )


def admin_stats(storage: Storage, caller: UserRecord) -> AdminStats:
    authorize(caller, ADMIN_ROLES)
    files = storage.list_files()
    since = utcnow() - MONTH
    return AdminStats(
        active_users=sum(1 for u in storage.list_users() if u.role == Role.USER.value),
        monthly_files=sum(1 for f in files if _as_utc(f.uploaded_at) > since),
        charts_generated=len(storage.list_charts()),
        storage_used=human_size(_bytes_on_disk(files)),
        pending_approvals=_count(files, FileStatus.PENDING),
    )


def superadmin_stats(storage: Storage, caller: UserRecord) -> SuperAdminStats:
    authorize(caller, SUPERADMIN_ROLES)
    files = storage.list_files()
    return SuperAdminStats(
        total_users=len(storage.list_users()),
        pending_approvals=_count(files, FileStatus.PENDING),
        files_processed=len(files) - _count(files, FileStatus.PENDING),
        admin_requests=len(storage.list_pending_admin_requests()),
    )
