from .product import Product
from .sale import Sale
from .business_settings import BusinessSettings
from .activity_log import ActivityLog
from .chat_message import ChatMessage
from .enums import BusinessType, ReportFrequency, ActivityAction, ChatRole
