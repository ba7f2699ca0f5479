# sales_dashboard/models/product.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, Float, DateTime, func, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sales_dashboard.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100))
    price: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    cost_price: Mapped[float] = mapped_column(Float, nullable=False, server_default="0")
    # may go negative on oversell
    stock: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    min_stock: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    unit: Mapped[str] = mapped_column(String(30), nullable=False, server_default="pcs")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_products_owner_name"),
        Index("ix_products_owner_category", "owner_id", "category"),
    )
