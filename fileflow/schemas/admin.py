
from pydantic import BaseModel, Field
from fileflow.schemas.records import Record

class AdminRequestCreate(BaseModel):
    message: str = Field(min_length=1, max_length=2000)

class RoleUpdate(BaseModel):
    role: str

class MessageOut(BaseModel):
    message: str

class DashboardStats(Record):
    total_uploads: int
    approved: int
    pending: int
    rejected: int
    charts: int

class AdminStats(Record):
    active_users: int
    monthly_files: int
    charts_generated: int
    storage_used: str
    pending_approvals: int

class SuperAdminStats(Record):
    total_users: int
    pending_approvals: int
    files_processed: int
    admin_requests: int
