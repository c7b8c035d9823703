"""Lifecycle of uploaded datasets: pending -> approved | rejected."""
import logging
from typing import Any, Iterable

from fileflow.auth.roles import ADMIN_ROLES, authorize, authorize_owner_or_role
from fileflow.errors import Conflict, NotFound, ValidationError
from fileflow.schemas.enums import FileStatus
from fileflow.schemas.records import FileRecord, UserRecord
from fileflow.storage.base import Storage, utcnow

logger = logging.getLogger(__name__)


def upload_file(
    storage: Storage,
    owner: UserRecord,
    original_name: str,
    storage_path: str,
    rows: Iterable[dict[str, Any]],
    filename: str | None = None,
) -> FileRecord:
    data = list(rows)
    if not data:
        raise ValidationError(f"'{original_name}' contains no data rows")
    record = storage.create_file(
        user_id=owner.id,
        filename=filename or original_name,
        original_name=original_name,
        storage_path=storage_path,
        data=data,
        status=FileStatus.PENDING.value,
    )
    logger.info("File %s uploaded by %s with %d rows", record.id, owner.id, len(data))
    return record


def _transition(storage: Storage, file_id: str, approver: UserRecord, target: FileStatus) -> FileRecord:
    authorize(approver, ADMIN_ROLES)
    current = storage.get_file(file_id)
    if current is None:
        raise NotFound("File not found")
    if current.status != FileStatus.PENDING.value:
        raise Conflict(f"File is already {current.status}")

    updated = storage.transition_file(
        file_id,
        FileStatus.PENDING.value,
        status=target.value,
        approved_by=approver.id,
        approved_at=utcnow(),
    )
    if updated is None:
        # another reviewer got there first
        latest = storage.get_file(file_id)
        raise Conflict(f"File is already {latest.status if latest else 'gone'}")

    logger.info("File %s %s by %s", file_id, target.value, approver.id)
    return updated


def approve_file(storage: Storage, file_id: str, approver: UserRecord) -> FileRecord:
    return _transition(storage, file_id, approver, FileStatus.APPROVED)


def reject_file(storage: Storage, file_id: str, approver: UserRecord) -> FileRecord:
    return _transition(storage, file_id, approver, FileStatus.REJECTED)


def list_pending_files(storage: Storage, caller: UserRecord) -> list[FileRecord]:
    authorize(caller, ADMIN_ROLES)
    return storage.list_pending_files()


def list_files_for_user(storage: Storage, caller: UserRecord) -> list[FileRecord]:
    if caller.role in ADMIN_ROLES:
        return storage.list_files()
    return storage.list_files_by_user(caller.id)


def get_file(storage: Storage, file_id: str, caller: UserRecord) -> FileRecord:
    record = storage.get_file(file_id)
    if record is None:
        raise NotFound("File not found")
    authorize_owner_or_role(caller, record.user_id, ADMIN_ROLES)
    return record
