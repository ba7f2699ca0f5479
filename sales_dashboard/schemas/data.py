from pydantic import BaseModel

from sales_dashboard.schemas.product import ProductRead
from sales_dashboard.schemas.sale import SaleRead
from sales_dashboard.schemas.settings import BusinessSettingsRead


class DataLoadResponse(BaseModel):
    products: list[ProductRead]
    sales: list[SaleRead]
    settings: BusinessSettingsRead
