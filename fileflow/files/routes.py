import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, UploadFile, File, Depends
from fileflow.auth.deps import get_storage, get_current_user, require_roles
from fileflow.auth.roles import ADMIN_ROLES
from fileflow.config import settings
from fileflow.errors import ValidationError, PayloadTooLarge
from fileflow.files import service
from fileflow.files.parser import is_supported, read_rows, extension_of
from fileflow.files.quota import enforce_upload_quota
from fileflow.schemas.records import FileRecord, UserRecord
from fileflow.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])

def _save_upload(data: bytes, original_name: str) -> tuple[str, Path]:
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_name = uuid.uuid4().hex + extension_of(original_name)
    path = upload_dir / stored_name
    path.write_bytes(data)
    return stored_name, path

@router.post("/upload", response_model=FileRecord)
async def upload(
    file: UploadFile | None = File(None),
    storage: Storage = Depends(get_storage),
    user: UserRecord = Depends(enforce_upload_quota),
):
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    if not is_supported(file.filename, file.content_type):
        logger.warning("Rejected upload %r (%s) from %s", file.filename, file.content_type, user.id)
        raise ValidationError("Only Excel (.xlsx, .xls) and CSV files are allowed")

    limit = settings.max_upload_mb * 1024 * 1024
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLarge(f"{file.filename} is larger than {settings.max_upload_mb}MB")

    stored_name, path = _save_upload(data, file.filename)
    try:
        rows = list(read_rows(str(path), file.filename))
        return service.upload_file(
            storage,
            owner=user,
            original_name=file.filename,
            storage_path=str(path),
            rows=rows,
            filename=stored_name,
        )
    except Exception:
        path.unlink(missing_ok=True)
        raise

@router.get("", response_model=list[FileRecord])
def list_files(storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.list_files_for_user(storage, user)

# must be declared before /{file_id}
@router.get("/pending", response_model=list[FileRecord])
def pending_files(storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*ADMIN_ROLES))):
    return service.list_pending_files(storage, user)

@router.get("/{file_id}", response_model=FileRecord)
def get_file(file_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.get_file(storage, file_id, user)

@router.patch("/{file_id}/approve", response_model=FileRecord)
def approve_file(file_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*ADMIN_ROLES))):
    return service.approve_file(storage, file_id, user)

@router.patch("/{file_id}/reject", response_model=FileRecord)
def reject_file(file_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(require_roles(*ADMIN_ROLES))):
    return service.reject_file(storage, file_id, user)
