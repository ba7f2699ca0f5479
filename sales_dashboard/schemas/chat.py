from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from sales_dashboard.models.enums import ChatRole


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000, description="User question")
    session_id: Optional[str] = Field(
        None, max_length=50, description="Conversation to continue; a new one is started when empty"
    )


class ChatResponse(BaseModel):
    response: str
    session_id: str
    source: Literal["llm", "local"] = "llm"


class ChatMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    session_id: str
    role: ChatRole
    content: str
    created_at: datetime


class ChatSessionRead(BaseModel):
    session_id: str
    title: str
    message_count: int
    started_at: datetime
    last_message_at: datetime
