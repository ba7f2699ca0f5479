from datetime import datetime
from pydantic import BaseModel


class ActivityLogRead(BaseModel):
    id: str
    action: str
    details: str
    created_at: datetime

    class Config:
        from_attributes = True
