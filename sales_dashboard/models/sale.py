# sales_dashboard/models/sale.py
from __future__ import annotations

import datetime as dt

from sqlalchemy import String, Integer, Float, Date, DateTime, func, Index
from sqlalchemy.orm import Mapped, mapped_column
from sales_dashboard.db.base import Base


class Sale(Base):
    __tablename__ = "sales"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    # no FK: sales history outlives deleted products
    product_id: Mapped[str] = mapped_column(String(50), nullable=False)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[float] = mapped_column(Float, nullable=False)
    total: Mapped[float] = mapped_column(Float, nullable=False)  # quantity * unit_price

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        # window queries "sales of owner between dates"
        Index("ix_sales_owner_date", "owner_id", "date"),
        Index("ix_sales_owner_product", "owner_id", "product_id"),
    )
