import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterable, TypeVar

from fileflow.errors import Conflict
from fileflow.schemas.records import Record, UserRecord, FileRecord, ChartRecord, AdminRequestRecord
from fileflow.storage.base import Storage, new_id, utcnow

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

TABLES = ("users", "files", "charts", "admin_requests")


class MemoryStorage(Storage):
    """Dict-backed storage.

    All access goes through a re-entrant lock. A transaction holds the lock
    for its whole duration and restores a snapshot of every table if the
    block raises.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._tables: dict[str, dict[str, Record]] = {name: {} for name in TABLES}
        self._tx_depth = 0

    # hooks for subclasses
    def _changed(self) -> None:
        pass

    def _commit(self) -> None:
        if self._tx_depth == 0:
            self._changed()

    def _insert(self, table: str, record: R) -> R:
        with self._lock:
            self._tables[table][record.id] = record
            self._commit()
            return record.model_copy(deep=True)

    def _get(self, table: str, key: str):
        with self._lock:
            record = self._tables[table].get(key)
            return record.model_copy(deep=True) if record is not None else None

    def _select(self, table: str, predicate: Callable[[Any], bool] = lambda r: True) -> list:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._tables[table].values() if predicate(r)]

    def _update(self, table: str, key: str, updates: dict, from_status: str | None = None):
        with self._lock:
            record = self._tables[table].get(key)
            if record is None:
                return None
            if from_status is not None and record.status != from_status:
                return None
            updated = record.model_copy(update=updates, deep=True)
            self._tables[table][key] = updated
            self._commit()
            return updated.model_copy(deep=True)

    @contextmanager
    def transaction(self):
        with self._lock:
            snapshot = {name: dict(rows) for name, rows in self._tables.items()}
            self._tx_depth += 1
            try:
                yield self
            except BaseException:
                self._tables = snapshot
                logger.warning("Transaction rolled back")
                raise
            finally:
                self._tx_depth -= 1
            if self._tx_depth == 0:
                self._changed()

    # Users
    def get_user(self, user_id):
        return self._get("users", user_id)

    def get_user_by_email(self, email):
        found = self._select("users", lambda u: u.email == email)
        return found[0] if found else None

    def create_user(self, email, password_hash, name, role="user"):
        with self._lock:
            if self.get_user_by_email(email) is not None:
                raise Conflict("User already exists")
            user = UserRecord(
                id=new_id(),
                email=email,
                password_hash=password_hash,
                name=name,
                role=role,
                created_at=utcnow(),
            )
            return self._insert("users", user)

    def update_user(self, user_id, **updates):
        return self._update("users", user_id, updates)

    def list_users(self):
        return self._select("users")

    # Files
    def create_file(self, user_id, filename, original_name, storage_path, data: Iterable[dict], status="pending"):
        record = FileRecord(
            id=new_id(),
            user_id=user_id,
            filename=filename,
            original_name=original_name,
            storage_path=storage_path,
            status=status,
            data=list(data),
            uploaded_at=utcnow(),
        )
        return self._insert("files", record)

    def get_file(self, file_id):
        return self._get("files", file_id)

    def list_files_by_user(self, user_id):
        return self._select("files", lambda f: f.user_id == user_id)

    def list_pending_files(self):
        return self._select("files", lambda f: f.status == "pending")

    def list_files(self):
        return self._select("files")

    def transition_file(self, file_id, from_status, **updates):
        return self._update("files", file_id, updates, from_status=from_status)

    # Charts
    def create_chart(self, user_id, file_id, title, type, x_axis, y_axis, config=None):
        record = ChartRecord(
            id=new_id(),
            user_id=user_id,
            file_id=file_id,
            title=title,
            type=type,
            x_axis=x_axis,
            y_axis=y_axis,
            config=config,
            created_at=utcnow(),
        )
        return self._insert("charts", record)

    def get_chart(self, chart_id):
        return self._get("charts", chart_id)

    def list_charts_by_user(self, user_id):
        return self._select("charts", lambda c: c.user_id == user_id)

    def list_charts_by_file(self, file_id):
        return self._select("charts", lambda c: c.file_id == file_id)

    def list_charts(self):
        return self._select("charts")

    # Admin requests
    def create_admin_request(self, user_id, message):
        record = AdminRequestRecord(
            id=new_id(),
            user_id=user_id,
            message=message,
            requested_at=utcnow(),
        )
        return self._insert("admin_requests", record)

    def get_admin_request(self, request_id):
        return self._get("admin_requests", request_id)

    def list_pending_admin_requests(self):
        return self._select("admin_requests", lambda r: r.status == "pending")

    def transition_admin_request(self, request_id, from_status, **updates):
        return self._update("admin_requests", request_id, updates, from_status=from_status)
