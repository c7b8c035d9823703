"""Storage interface shared by the memory, JSON and SQL backends.

Every backend returns detached records (``fileflow.schemas.records``), never
its own internal objects, so callers may hold on to them freely.
"""
import uuid
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any, Iterable

from fileflow.schemas.records import UserRecord, FileRecord, ChartRecord, AdminRequestRecord


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Storage(ABC):

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> UserRecord | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> UserRecord | None: ...

    @abstractmethod
    def create_user(self, email: str, password_hash: str, name: str, role: str = "user") -> UserRecord: ...

    @abstractmethod
    def update_user(self, user_id: str, **updates: Any) -> UserRecord | None: ...

    @abstractmethod
    def list_users(self) -> list[UserRecord]: ...

    # Files
    @abstractmethod
    def create_file(
        self,
        user_id: str,
        filename: str,
        original_name: str,
        storage_path: str,
        data: Iterable[dict],
        status: str = "pending",
    ) -> FileRecord: ...

    @abstractmethod
    def get_file(self, file_id: str) -> FileRecord | None: ...

    @abstractmethod
    def list_files_by_user(self, user_id: str) -> list[FileRecord]: ...

    @abstractmethod
    def list_pending_files(self) -> list[FileRecord]: ...

    @abstractmethod
    def list_files(self) -> list[FileRecord]: ...

    @abstractmethod
    def transition_file(self, file_id: str, from_status: str, **updates: Any) -> FileRecord | None:
        """Apply ``updates`` only if the file is currently in ``from_status``.

        Returns the updated record, or ``None`` when the file is missing or
        its status no longer matches.
        """

    # Charts
    @abstractmethod
    def create_chart(
        self,
        user_id: str,
        file_id: str,
        title: str,
        type: str,
        x_axis: str,
        y_axis: str,
        config: dict | None = None,
    ) -> ChartRecord: ...

    @abstractmethod
    def get_chart(self, chart_id: str) -> ChartRecord | None: ...

    @abstractmethod
    def list_charts_by_user(self, user_id: str) -> list[ChartRecord]: ...

    @abstractmethod
    def list_charts_by_file(self, file_id: str) -> list[ChartRecord]: ...

    @abstractmethod
    def list_charts(self) -> list[ChartRecord]: ...

    # Admin requests
    @abstractmethod
    def create_admin_request(self, user_id: str, message: str) -> AdminRequestRecord: ...

    @abstractmethod
    def get_admin_request(self, request_id: str) -> AdminRequestRecord | None: ...

    @abstractmethod
    def list_pending_admin_requests(self) -> list[AdminRequestRecord]: ...

    @abstractmethod
    def transition_admin_request(self, request_id: str, from_status: str, **updates: Any) -> AdminRequestRecord | None:
        """Compare-and-set counterpart of ``transition_file`` for admin requests."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager["Storage"]:
        """Scope whose writes are applied together or not at all.

        Yields the storage handle to use inside the scope. Nested calls join
        the outer transaction.
        """
