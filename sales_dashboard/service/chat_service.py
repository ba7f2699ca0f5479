import logging
from typing import Optional

import httpx
from fastapi import HTTPException, status

from sales_dashboard.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a business assistant for a small retail business. Give practical, actionable advice based on the following business data:

{context}

Answer in plain language. Focus on:
1. Analysis relevant to the question
2. Concrete recommendations
3. Specific numbers where they matter
4. Tips that can be applied right away"""

FALLBACK_ANSWER = "Sorry, I could not process that request."


class ChatService:
    """Forwards a question plus the owner's business context to an OpenAI-compatible chat endpoint."""

    def __init__(self, config: Settings = default_settings, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.client = client

    @property
    def configured(self) -> bool:
        return bool(self.config.NVIDIA_API_KEY)

    def _payload(self, message: str, context: str) -> dict:
        return {
            "model": self.config.CHAT_MODEL,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT.format(context=context)},
                {"role": "user", "content": message},
            ],
            "temperature": self.config.CHAT_TEMPERATURE,
            "max_tokens": self.config.CHAT_MAX_TOKENS,
        }

    async def _post(self, payload: dict) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.config.NVIDIA_API_KEY}"}
        if self.client is not None:
            return await self.client.post(self.config.CHAT_API_URL, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.config.CHAT_TIMEOUT) as client:
            return await client.post(self.config.CHAT_API_URL, json=payload, headers=headers)

    async def ask(self, message: str, context: str) -> str:
        if not self.configured:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Chat API key is not configured on the server",
            )

        logger.info("Sending chat request to %s", self.config.CHAT_API_URL)
        try:
            response = await self._post(self._payload(message, context))
        except httpx.HTTPError as e:
            logger.error(f"Chat request failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Chat service error, please try again",
            )

        if response.status_code == 401:
            logger.error("Chat API rejected the key: %s", response.text)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid chat API key")
        if response.status_code == 429:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests, please try again shortly",
            )
        if response.is_error:
            logger.error("Chat API error %s: %s", response.status_code, response.text)
            raise HTTPException(
                status_code=response.status_code,
                detail=f"Failed to get a response from the assistant ({response.status_code})",
            )

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"] or FALLBACK_ANSWER
        except (ValueError, KeyError, IndexError, TypeError):
            logger.warning("Unexpected chat API payload: %s", response.text)
            return FALLBACK_ANSWER
