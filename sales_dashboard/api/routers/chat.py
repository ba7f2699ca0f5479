from typing import Optional
from fastapi import APIRouter, Depends, Query
from sales_dashboard.schemas.chat import ChatMessageRead, ChatRequest, ChatResponse, ChatSessionRead
from sales_dashboard.service.conversation_service import ConversationService
from sales_dashboard.api.deps import get_owner_id, get_conversation_service

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse, summary="Ask the business assistant")
async def chat(
    payload: ChatRequest,
    owner_id: str = Depends(get_owner_id),
    service: ConversationService = Depends(get_conversation_service),
):
    return await service.send(owner_id, payload)


@router.get("/history", response_model=list[ChatMessageRead], summary="Chat messages, oldest first")
async def get_history(
    session_id: Optional[str] = Query(None, description="Only this conversation"),
    limit: int = Query(100, ge=1, le=500),
    owner_id: str = Depends(get_owner_id),
    service: ConversationService = Depends(get_conversation_service),
):
    return await service.history(owner_id, session_id, limit)


@router.delete("/history", summary="Clear chat history")
async def clear_history(
    session_id: Optional[str] = Query(None, description="Only this conversation"),
    owner_id: str = Depends(get_owner_id),
    service: ConversationService = Depends(get_conversation_service),
):
    return await service.clear(owner_id, session_id)


@router.get("/sessions", response_model=list[ChatSessionRead], summary="Saved conversations")
async def get_sessions(
    owner_id: str = Depends(get_owner_id),
    service: ConversationService = Depends(get_conversation_service),
):
    return await service.sessions(owner_id)
