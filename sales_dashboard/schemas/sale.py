import datetime as dt
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from sales_dashboard.schemas.analytics import DailyAggregateRead


class SaleCreate(BaseModel):
    date: dt.date = Field(..., description="Calendar day of the sale")
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    unit_price: Optional[float] = Field(None, ge=0, description="Defaults to the product price")


class SaleBulkCreate(BaseModel):
    sales: list[SaleCreate] = Field(..., min_length=1)


class SaleEdit(BaseModel):
    date: Optional[dt.date] = None
    product_id: Optional[str] = Field(None, min_length=1)
    product_name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, gt=0)
    unit_price: Optional[float] = Field(None, ge=0)


class SaleRead(BaseModel):
    id: str
    date: dt.date
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total: float
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class SaleListResponse(BaseModel):
    sales: list[SaleRead]
    daily_sales: list[DailyAggregateRead]
    total: int
