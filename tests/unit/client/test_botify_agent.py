"""
Tests for the BotifyAgent client.
"""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from botify_agent.client.botify_agent import BotifyAgent
from botify_agent.domains.messages import IncomingMessage


@pytest.fixture
def chat_service():
    service = MagicMock()
    service.handle_message = AsyncMock(return_value="Paused.")
    service.delete_user_history = AsyncMock()
    service.agent_service.run = AsyncMock(return_value="Playing.")
    service.auth_service.ensure_valid_token = AsyncMock(return_value=True)
    service.auth_service.complete_authorization = AsyncMock(return_value="record")
    service.auth_service.create_authorization.return_value = ("https://auth", "auth-1")
    return service


@pytest.fixture
def agent(chat_service):
    return BotifyAgent(chat_service=chat_service)


class TestBotifyAgent:
    def test_requires_configuration(self):
        with pytest.raises(ValueError):
            BotifyAgent()

    def test_loads_config_file(self, tmp_path):
        config = {"mongo": {"connection_string": "mongodb://localhost", "database": "db"}}
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config))

        with patch("botify_agent.client.botify_agent.BotifyFactory") as factory:
            BotifyAgent(config_path=str(path))

        factory.create_from_config.assert_called_once_with(config)

    @pytest.mark.asyncio
    async def test_handle_update(self, agent, chat_service):
        update = {"update_id": 1, "message": {"message_id": 7, "chat": {"id": 42}, "text": "pause"}}

        reply = await agent.handle_update(update)

        assert reply == "Paused."
        message = chat_service.handle_message.await_args.args[0]
        assert isinstance(message, IncomingMessage)
        assert message.text == "pause"

    @pytest.mark.asyncio
    async def test_update_without_message_is_ignored(self, agent, chat_service):
        assert await agent.handle_update({"update_id": 1, "callback_query": {}}) is None
        chat_service.handle_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_process(self, agent, chat_service):
        reply = await agent.process("42", "play", history=[{"role": "user", "content": "hi"}])

        assert reply == "Playing."
        chat_service.auth_service.ensure_valid_token.assert_awaited_once_with("42")
        chat_service.agent_service.run.assert_awaited_once_with(
            "42", "play", history=[{"role": "user", "content": "hi"}]
        )

    @pytest.mark.asyncio
    async def test_authorization_flow(self, agent, chat_service):
        assert agent.create_authorization("42") == ("https://auth", "auth-1")
        assert await agent.complete_authorization("auth-1", "code") == "record"
        chat_service.auth_service.complete_authorization.assert_awaited_once_with("auth-1", "code")

    @pytest.mark.asyncio
    async def test_delete_user_history(self, agent, chat_service):
        await agent.delete_user_history("42")
        chat_service.delete_user_history.assert_awaited_once_with("42")
