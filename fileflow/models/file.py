
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from fileflow.db.session import Base
from fileflow.models.user import _uuid, _now

class UploadedFile(Base):
    __tablename__ = "files"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    storage_path = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    data = Column(JSON)
    uploaded_at = Column(DateTime(timezone=True), default=_now)
    approved_by = Column(String(36), ForeignKey("users.id"))
    approved_at = Column(DateTime(timezone=True))
