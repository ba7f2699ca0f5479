from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from sales_dashboard.models.enums import BusinessType, ReportFrequency

DEFAULT_CATEGORIES = ["Food", "Beverages", "Snacks", "Other"]
DEFAULT_UNITS = ["pcs", "box", "kg", "liter"]


class BusinessSettingsRead(BaseModel):
    business_name: str
    store_address: str = ""
    business_type: BusinessType = BusinessType.retail
    currency: str = "IDR"
    timezone: str = "Asia/Jakarta"
    low_stock_threshold: int = 10
    enable_notifications: bool = True
    enable_auto_reports: bool = False
    report_frequency: ReportFrequency = ReportFrequency.weekly
    notification_email: str = ""
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    units: list[str] = Field(default_factory=lambda: list(DEFAULT_UNITS))

    model_config = ConfigDict(from_attributes=True)


class BusinessSettingsUpdate(BaseModel):
    business_name: Optional[str] = Field(None, min_length=1, max_length=255)
    store_address: Optional[str] = Field(None, max_length=500)
    business_type: Optional[BusinessType] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=10)
    timezone: Optional[str] = Field(None, min_length=1, max_length=64)
    low_stock_threshold: Optional[int] = Field(None, ge=0)
    enable_notifications: Optional[bool] = None
    enable_auto_reports: Optional[bool] = None
    report_frequency: Optional[ReportFrequency] = None
    notification_email: Optional[str] = Field(None, max_length=255)
    categories: Optional[list[str]] = None
    units: Optional[list[str]] = None
