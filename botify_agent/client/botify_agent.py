"""
Simplified client interface for interacting with the Botify Agent system.

This module provides a clean API for the HTTP layer (Telegram webhook,
Spotify OAuth callback) and for local use, without dealing with internal
implementation details.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from botify_agent.domains.auth import AuthRecord
from botify_agent.domains.messages import IncomingMessage
from botify_agent.factories.agent_factory import BotifyFactory
from botify_agent.interfaces.client.client import BotifyAgent as BotifyAgentInterface
from botify_agent.services.chat import ChatService

logger = logging.getLogger(__name__)


class BotifyAgent(BotifyAgentInterface):
    """Simplified client interface for interacting with the agent system."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        chat_service: Optional[ChatService] = None,
    ):
        """Initialize the agent system from config file or dictionary.

        Args:
            config_path: Path to a JSON configuration file
            config: Configuration dictionary
            chat_service: Pre-built chat service, skipping configuration
        """
        if chat_service is None:
            if not config and not config_path:
                raise ValueError("Either config or config_path must be provided")
            if config_path:
                with open(config_path, "r") as f:
                    config = json.load(f)
            chat_service = BotifyFactory.create_from_config(config)

        self.chat_service = chat_service
        self.agent_service = chat_service.agent_service
        self.auth_service = chat_service.auth_service

    async def handle_update(self, update: Dict[str, Any]) -> Optional[str]:
        """Handle a Telegram webhook update body.

        Updates that carry no message (edits, callbacks, ...) are ignored.
        """
        try:
            message = IncomingMessage.from_update(update)
        except (KeyError, ValueError) as e:
            logger.info(f"Ignoring Telegram update: {e}")
            return None
        return await self.chat_service.handle_message(message)

    async def process(
        self,
        user_id: str,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        """Run one agent turn for a user, without the Telegram surface.

        Raises:
            AgentExecutionError: If the agent could not produce a reply
        """
        if not await self.auth_service.ensure_valid_token(user_id):
            logger.warning(f"No valid Spotify token for user {user_id}")
        return await self.agent_service.run(user_id, message, history=history)

    def create_authorization(self, user_id: str) -> Tuple[str, str]:
        return self.auth_service.create_authorization(user_id)

    async def complete_authorization(self, auth_id: str, code: str) -> AuthRecord:
        return await self.auth_service.complete_authorization(auth_id, code)

    async def delete_user_history(self, user_id: str) -> None:
        await self.chat_service.delete_user_history(user_id)
