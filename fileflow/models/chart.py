
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from fileflow.db.session import Base
from fileflow.models.user import _uuid, _now

class Chart(Base):
    __tablename__ = "charts"
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    file_id = Column(String(36), ForeignKey("files.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    type = Column(String(10), nullable=False)
    x_axis = Column(String(255), nullable=False)
    y_axis = Column(String(255), nullable=False)
    config = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=_now)
