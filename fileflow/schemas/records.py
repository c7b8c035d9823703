"""Entity records shared by every storage backend.

Field names are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fileflow.schemas.enums import Role, FileStatus, ChartType, RequestStatus


class Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class UserRecord(Record):
    id: str
    email: str
    password_hash: str
    name: str
    role: Role = Role.USER
    created_at: datetime


class FileRecord(Record):
    id: str
    user_id: str
    filename: str
    original_name: str
    storage_path: str
    status: FileStatus = FileStatus.PENDING
    data: list[dict[str, Any]] = Field(default_factory=list)
    uploaded_at: datetime
    approved_by: str | None = None
    approved_at: datetime | None = None


class ChartRecord(Record):
    id: str
    user_id: str
    file_id: str
    title: str
    type: ChartType
    x_axis: str
    y_axis: str
    config: dict[str, Any] | None = None
    created_at: datetime


class AdminRequestRecord(Record):
    id: str
    user_id: str
    message: str
    status: RequestStatus = RequestStatus.PENDING
    requested_at: datetime
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
