from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Product name, unique per owner")
    category: Optional[str] = Field(None, max_length=100, description="Product category")
    price: float = Field(0, ge=0, description="Selling price")
    cost_price: float = Field(0, ge=0, description="Purchase price")
    stock: int = Field(0, description="Units on hand")
    min_stock: int = Field(0, ge=0, description="Low-stock threshold")
    unit: str = Field("pcs", min_length=1, max_length=30)


class ProductCreate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductEdit(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = None
    min_stock: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=30)


class ProductList(BaseModel):
    products: list[ProductRead]
    total: int
