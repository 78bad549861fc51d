"""
Chat service implementation.

Handles one inbound Telegram message end to end: access check,
de-duplication, persistence, the connect-Spotify prompt, token refresh, the
agent turn and the reply.
"""
import logging
from typing import Optional, Union

from botify_agent.domains.errors import ExternalServiceError
from botify_agent.domains.messages import ChatMessage, IncomingMessage, MessageRole
from botify_agent.interfaces.providers.messenger import ChatProvider
from botify_agent.interfaces.repositories.message import MessageRepository
from botify_agent.interfaces.services.agent import AgentService
from botify_agent.interfaces.services.auth import AuthService
from botify_agent.interfaces.services.chat import ChatService as ChatServiceInterface

logger = logging.getLogger(__name__)

__all__ = ["ChatService", "FALLBACK_MESSAGE"]

DEFAULT_HISTORY_LIMIT = 20

FALLBACK_MESSAGE = (
    "Sorry, I couldn't complete your request right now. Please try again in a moment."
)


class ChatService(ChatServiceInterface):
    """Service tying the chat surface to the Spotify agent."""

    def __init__(
        self,
        chat_provider: ChatProvider,
        agent_service: AgentService,
        auth_service: AuthService,
        message_repository: MessageRepository,
        allowed_user_id: Optional[Union[int, str]] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.chat_provider = chat_provider
        self.agent_service = agent_service
        self.auth_service = auth_service
        self.message_repository = message_repository
        self.allowed_user_id = str(allowed_user_id) if allowed_user_id is not None else None
        self.history_limit = history_limit

    async def handle_message(self, message: IncomingMessage) -> Optional[str]:
        """Process a message and return the reply sent, if any.

        Messages already seen (same user and message id) and messages
        without text are ignored.
        """
        user_id = message.user_id

        if self.allowed_user_id is not None and user_id != self.allowed_user_id:
            logger.warning(f"Ignoring message from unknown chat {user_id}")
            reply = f"Hello {message.first_name or 'there'},\n\nYou said: {message.text}"
            await self.chat_provider.send_message(message.chat_id, reply)
            return reply

        if not message.text.strip():
            logger.info(f"Ignoring message {message.message_id} without text")
            return None

        if self.message_repository.find_by_id(user_id, message.message_id):
            logger.info(f"Message {message.message_id} of user {user_id} already processed")
            return None

        history = self.message_repository.find_by_user_id(user_id, limit=self.history_limit)
        self.message_repository.create(
            ChatMessage(
                user_id=user_id,
                message_id=message.message_id,
                text=message.text,
                role=MessageRole.USER,
            )
        )

        record = self.auth_service.find_token(user_id)
        if record is None or record.is_pending:
            return await self._send_connect_prompt(message)

        if not await self.auth_service.ensure_valid_token(user_id):
            logger.warning(f"Spotify token of user {user_id} could not be refreshed")

        try:
            reply = await self.agent_service.run(
                user_id,
                message.text,
                history=[entry.to_history() for entry in history],
                chat_id=message.chat_id,
            )
        except Exception as e:
            logger.exception(f"Agent failed for user {user_id}: {e}")
            await self.chat_provider.send_message(message.chat_id, FALLBACK_MESSAGE)
            return FALLBACK_MESSAGE

        return await self._deliver_reply(message, reply)

    async def delete_user_history(self, user_id: str) -> None:
        deleted = self.message_repository.delete_by_user_id(user_id)
        logger.info(f"Deleted {deleted} messages of user {user_id}")

    async def _send_connect_prompt(self, message: IncomingMessage) -> str:
        url, _ = self.auth_service.create_authorization(message.user_id)
        reply = (
            f"Hello {message.first_name or 'there'},\n\n"
            "It seems you haven't connected your Spotify account yet. Please click the "
            "button below to connect your Spotify account so we can proceed with your request."
        )
        markup = {"inline_keyboard": [[{"text": "🔗  Connect Spotify", "url": url}]]}
        await self._send_and_store(message, reply, reply_markup=markup)
        return reply

    async def _deliver_reply(self, message: IncomingMessage, reply: str) -> str:
        """Send the agent reply, retrying as plain text if Telegram rejects it.

        Webhook redeliveries are de-duplicated, so this is the only attempt.
        """
        try:
            await self._send_and_store(message, reply)
            return reply
        except ExternalServiceError as e:
            logger.warning(
                f"Reply to user {message.user_id} rejected, resending as plain text: {e}"
            )

        try:
            await self._send_and_store(message, reply, parse_mode=None)
            return reply
        except ExternalServiceError as e:
            logger.exception(f"Reply to user {message.user_id} could not be delivered: {e}")

        await self.chat_provider.send_message(message.chat_id, FALLBACK_MESSAGE, parse_mode=None)
        return FALLBACK_MESSAGE

    async def _send_and_store(
        self,
        message: IncomingMessage,
        text: str,
        reply_markup: Optional[dict] = None,
        parse_mode: Optional[str] = "Markdown",
    ) -> None:
        sent = await self.chat_provider.send_message(
            message.chat_id, text, reply_markup=reply_markup, parse_mode=parse_mode
        )
        sent_id = sent.get("message_id")
        self.message_repository.create(
            ChatMessage(
                user_id=message.user_id,
                message_id=str(sent_id) if sent_id is not None else f"{message.message_id}:reply",
                text=text,
                role=MessageRole.ASSISTANT,
            )
        )
