"""
Telegram Bot API adapter for the Botify Agent system.

This adapter implements the ChatProvider interface over httpx.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from botify_agent.domains.errors import ExternalServiceError
from botify_agent.interfaces.providers.messenger import ChatId, ChatProvider

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.telegram.org"


class TelegramAdapter(ChatProvider):
    """Telegram implementation of ChatProvider."""

    def __init__(
        self,
        bot_token: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.bot_token = bot_token
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def send_message(
        self,
        chat_id: ChatId,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        parse_mode: Optional[str] = "Markdown",
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._call("sendMessage", payload)

    async def edit_message(
        self,
        chat_id: ChatId,
        message_id: str,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "message_id": int(message_id),
            "text": text,
            "parse_mode": "Markdown",
            "disable_web_page_preview": True,
        }
        if reply_markup:
            payload["reply_markup"] = reply_markup
        return await self._call("editMessageText", payload)

    async def _call(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{API_BASE_URL}/bot{self.bot_token}/{method}"
        response = await self.client.post(url, json=payload)
        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400 or not body.get("ok"):
            description = body.get("description") or response.reason_phrase
            logger.error(f"Telegram {method} failed: {response.status_code} {description}")
            raise ExternalServiceError(f"Telegram {method} failed: {description}")

        result = body.get("result")
        return result if isinstance(result, dict) else {}
