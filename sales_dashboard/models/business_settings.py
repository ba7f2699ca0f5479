from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, func
from sales_dashboard.db.base import Base


class BusinessSettings(Base):
    __tablename__ = "business_settings"

    id = Column(String(50), primary_key=True)
    owner_id = Column(String(100), nullable=False, unique=True)
    business_name = Column(String(255), nullable=False)
    store_address = Column(String(500), nullable=False, default="")
    business_type = Column(String(20), nullable=False, default="retail")
    currency = Column(String(10), nullable=False, default="IDR")
    timezone = Column(String(64), nullable=False, default="Asia/Jakarta")
    low_stock_threshold = Column(Integer, nullable=False, default=10)
    enable_notifications = Column(Boolean, nullable=False, default=True)
    enable_auto_reports = Column(Boolean, nullable=False, default=False)
    report_frequency = Column(String(10), nullable=False, default="weekly")
    notification_email = Column(String(255), nullable=False, default="")
    categories = Column(JSON, nullable=False, default=list)
    units = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
