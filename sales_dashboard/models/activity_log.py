from sqlalchemy import Column, String, DateTime, Index
from datetime import datetime
from sales_dashboard.db.base import Base

class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(String(50), primary_key=True)
    owner_id = Column(String(100), nullable=False)
    action = Column(String(50), nullable=False)
    details = Column(String(1000), nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_activity_logs_owner_created", "owner_id", "created_at"),
    )
