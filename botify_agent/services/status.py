"""
Status message service.

Keeps one editable chat message per user while a tool call is running:
created (or reused) when the tool starts, edited while it works, and
finalized with a summary when it is done, which forgets the message so the
next tool call starts a fresh one.
"""
import logging

from botify_agent.interfaces.providers.messenger import (
    ChatId,
    ChatProvider,
    StatusMessenger,
)
from botify_agent.interfaces.repositories.status import StatusMessageStore

logger = logging.getLogger(__name__)

__all__ = ["TelegramStatusMessenger"]


class TelegramStatusMessenger(StatusMessenger):
    """StatusMessenger on top of a chat provider and a status message store."""

    def __init__(self, chat_provider: ChatProvider, store: StatusMessageStore):
        self.chat_provider = chat_provider
        self.store = store

    async def create_status_message(self, user_id: str, chat_id: ChatId, text: str) -> str:
        message_id = self.store.get(user_id)
        if message_id is not None:
            await self.chat_provider.edit_message(chat_id, message_id, text)
            return message_id

        sent = await self.chat_provider.send_message(chat_id, text)
        message_id = str(sent["message_id"])
        self.store.set(user_id, message_id)
        logger.debug(f"Created status message {message_id} for user {user_id}")
        return message_id

    async def update_status_message(self, user_id: str, chat_id: ChatId, text: str) -> None:
        message_id = self.store.get(user_id)
        if message_id is None:
            await self.create_status_message(user_id, chat_id, text)
            return
        await self.chat_provider.edit_message(chat_id, message_id, text)

    async def finalize_status_message(self, user_id: str, chat_id: ChatId, text: str) -> None:
        message_id = self.store.get(user_id)
        try:
            if message_id is None:
                await self.chat_provider.send_message(chat_id, text)
            else:
                await self.chat_provider.edit_message(chat_id, message_id, text)
        finally:
            self.store.clear(user_id)
            logger.debug(f"Finalized status message {message_id} for user {user_id}")
