"""
Factory for creating and wiring components of the Botify Agent system.

This module handles the creation and dependency injection for all
services and components used in the system.
"""
import logging
from typing import Any, Dict

import httpx

# Service imports
from botify_agent.services.agent import AgentService
from botify_agent.services.auth import AuthService
from botify_agent.services.chat import ChatService
from botify_agent.services.status import TelegramStatusMessenger

# Repository imports
from botify_agent.repositories.auth import MongoAuthRepository
from botify_agent.repositories.message import MongoMessageRepository
from botify_agent.repositories.status import InMemoryStatusMessageStore

# Adapter imports
from botify_agent.adapters.mongodb_adapter import MongoDBAdapter
from botify_agent.adapters.openai_adapter import OpenAIAdapter
from botify_agent.adapters.spotify_adapter import SpotifyAdapter
from botify_agent.adapters.spotify_oauth_adapter import SpotifyOAuthAdapter
from botify_agent.adapters.telegram_adapter import TelegramAdapter

# Plugin imports
from botify_agent.plugins.tools import list_tools

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30.0


def _require(config: Dict[str, Any], section: str, key: str, label: str) -> Any:
    if section not in config or not config[section].get(key):
        raise ValueError(f"{label} is required.")
    return config[section][key]


class BotifyFactory:
    """Factory for creating and wiring components of the Botify Agent system."""

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> ChatService:
        """Create the agent system from configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Configured ChatService instance; its ``agent_service`` and
            ``auth_service`` attributes expose the rest of the system

        Raises:
            ValueError: If a required setting is missing
        """
        connection_string = _require(
            config, "mongo", "connection_string", "MongoDB connection string"
        )
        database = _require(config, "mongo", "database", "MongoDB database name")
        llm_api_key = _require(config, "openai", "api_key", "OpenAI API key")
        client_id = _require(config, "spotify", "client_id", "Spotify client id")
        client_secret = _require(config, "spotify", "client_secret", "Spotify client secret")
        redirect_uri = _require(config, "spotify", "redirect_uri", "Spotify redirect URI")
        bot_token = _require(config, "telegram", "bot_token", "Telegram bot token")

        http_client = httpx.AsyncClient(timeout=DEFAULT_HTTP_TIMEOUT)

        # Create adapters
        db_adapter = MongoDBAdapter(connection_string=connection_string, database_name=database)

        llm_model = config["openai"].get("model")
        if llm_model:
            logger.info(f"Using OpenAI as LLM provider with model: {llm_model}")
        else:
            logger.info("Using OpenAI as LLM provider")

        logfire_api_key = None
        if "logfire" in config:
            logfire_api_key = _require(config, "logfire", "api_key", "Pydantic Logfire API key")
        llm_adapter = OpenAIAdapter(
            api_key=llm_api_key,
            model=llm_model,
            logfire_api_key=logfire_api_key,
        )

        oauth_adapter = SpotifyOAuthAdapter(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            client=http_client,
        )
        telegram_adapter = TelegramAdapter(bot_token=bot_token, client=http_client)

        # Create repositories
        auth_repository = MongoAuthRepository(db_adapter)
        message_repository = MongoMessageRepository(db_adapter)

        # Create services
        auth_service = AuthService(
            auth_repository=auth_repository,
            auth_provider=oauth_adapter,
            spotify_client_factory=lambda access_token: SpotifyAdapter(
                access_token, client=http_client
            ),
            expiry_margin_seconds=int(config["spotify"].get("expiry_margin_seconds", 0)),
        )

        messenger = None
        if config["telegram"].get("status_messages", True):
            messenger = TelegramStatusMessenger(telegram_adapter, InMemoryStatusMessageStore())

        agent_service = AgentService(
            llm_provider=llm_adapter,
            tool_provider=lambda: list_tools(auth_service.build_spotify_client),
            model=llm_model,
            max_iterations=int(config["openai"].get("max_iterations", 8)),
            messenger=messenger,
        )

        allowed_user_id = config["telegram"].get("allowed_user_id")
        if allowed_user_id is None:
            logger.warning("No telegram.allowed_user_id configured; every chat may use the bot")

        return ChatService(
            chat_provider=telegram_adapter,
            agent_service=agent_service,
            auth_service=auth_service,
            message_repository=message_repository,
            allowed_user_id=allowed_user_id,
        )
