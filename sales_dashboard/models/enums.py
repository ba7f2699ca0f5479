from enum import Enum


class BusinessType(str, Enum):
    retail = "retail"
    wholesale = "wholesale"
    fnb = "fnb"
    service = "service"
    other = "other"


class ReportFrequency(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class ActivityAction(str, Enum):
    add_product = "ADD_PRODUCT"
    update_product = "UPDATE_PRODUCT"
    delete_product = "DELETE_PRODUCT"
    import_sales = "IMPORT_SALES"
    update_settings = "UPDATE_SETTINGS"


class ChatRole(str, Enum):
    user = "user"
    assistant = "assistant"
