import logging
from typing import Optional
from uuid import uuid4

from sales_dashboard.models.enums import ChatRole
from sales_dashboard.repositories.chat_repo import ChatRepository
from sales_dashboard.schemas.chat import ChatMessageRead, ChatRequest, ChatResponse, ChatSessionRead
from sales_dashboard.service.analytics_service import AnalyticsService
from sales_dashboard.service.chat_service import ChatService

logger = logging.getLogger(__name__)

TITLE_LENGTH = 60


class ConversationService:
    """Chat turns with persisted history: question stored, answered by the model or the local rules, answer stored."""

    def __init__(
        self,
        repo: ChatRepository,
        chat: ChatService,
        analytics: AnalyticsService,
    ):
        self.repo = repo
        self.chat = chat
        self.analytics = analytics

    async def send(self, owner_id: str, payload: ChatRequest) -> ChatResponse:
        session_id = payload.session_id or str(uuid4())
        await self.repo.add(owner_id, session_id, ChatRole.user.value, payload.message)

        if not self.chat.configured and self.chat.config.CHAT_LOCAL_FALLBACK:
            answer = await self.analytics.local_answer(owner_id, payload.message)
            source = "local"
        else:
            # a failing model call propagates; the question stays in the history
            context = await self.analytics.business_context(owner_id)
            answer = await self.chat.ask(payload.message, context)
            source = "llm"

        await self.repo.add(owner_id, session_id, ChatRole.assistant.value, answer)
        logger.info("owner %s: chat turn in session %s answered by %s", owner_id, session_id, source)
        return ChatResponse(response=answer, session_id=session_id, source=source)

    async def history(
        self, owner_id: str, session_id: Optional[str] = None, limit: int = 100
    ) -> list[ChatMessageRead]:
        messages = await self.repo.history(owner_id, session_id, limit)
        return [ChatMessageRead.model_validate(m) for m in messages]

    async def sessions(self, owner_id: str) -> list[ChatSessionRead]:
        rows = await self.repo.sessions(owner_id)
        return [ChatSessionRead(**{**row, "title": row["title"][:TITLE_LENGTH]}) for row in rows]

    async def clear(self, owner_id: str, session_id: Optional[str] = None) -> dict:
        deleted = await self.repo.clear(owner_id, session_id)
        logger.info("owner %s: cleared %d chat messages", owner_id, deleted)
        return {"detail": f"Deleted {deleted} messages."}
