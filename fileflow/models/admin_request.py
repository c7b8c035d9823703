
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from fileflow.db.session import Base
from fileflow.models.user import _uuid, _now

class AdminRequest(Base):
    __tablename__ = "admin_requests"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    requested_at = Column(DateTime(timezone=True), default=_now)
    reviewed_by = Column(String(36), ForeignKey("users.id"))
    reviewed_at = Column(DateTime(timezone=True))
