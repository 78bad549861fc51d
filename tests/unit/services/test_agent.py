"""
Tests for the AgentService tool-calling loop.
"""
import copy
import json

import pytest

from botify_agent.domains.errors import AgentExecutionError
from botify_agent.interfaces.providers.llm import LLMProvider
from botify_agent.plugins.tools import list_tools
from botify_agent.services.agent import SYSTEM_PROMPT, AgentService


class ScriptedLLM(LLMProvider):
    """Replays one list of stream events per model call."""

    def __init__(self, turns):
        self.turns = list(turns)
        self.calls = []

    async def chat_stream(self, messages, model=None, tools=None):
        self.calls.append({"messages": copy.deepcopy(messages), "tools": tools})
        for event in self.turns.pop(0):
            yield event


class RaisingLLM(LLMProvider):
    """Fails before producing any event."""

    async def chat_stream(self, messages, model=None, tools=None):
        raise RuntimeError("rate limited")
        yield  # pragma: no cover


def text(reply):
    return [{"type": "content", "delta": reply}, {"type": "message_end", "finish_reason": "stop"}]


def tool_call(name, arguments, call_id="call_1", index=0):
    # Split arguments across deltas the way streaming providers do
    middle = len(arguments) // 2
    return [
        {"type": "tool_call_delta", "id": call_id, "index": index, "name": name, "arguments_delta": ""},
        {"type": "tool_call_delta", "id": None, "index": index, "name": None, "arguments_delta": arguments[:middle]},
        {"type": "tool_call_delta", "id": None, "index": index, "name": None, "arguments_delta": arguments[middle:]},
    ]


def tool_outputs(call):
    return [json.loads(m["content"]) for m in call["messages"] if m["role"] == "tool"]


@pytest.fixture
def make_agent(spotify_factory):
    def make(turns, **kwargs):
        llm = ScriptedLLM(turns)
        agent = AgentService(llm, lambda: list_tools(spotify_factory), **kwargs)
        return agent, llm

    return make


class TestAgentService:
    @pytest.mark.asyncio
    async def test_plain_reply(self, make_agent):
        agent, llm = make_agent([text("Hello! ")])

        reply = await agent.run("42", "hi")

        assert reply == "Hello!"
        messages = llm.calls[0]["messages"]
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[-1] == {"role": "user", "content": "hi"}

    @pytest.mark.asyncio
    async def test_tools_are_offered(self, make_agent):
        agent, llm = make_agent([text("ok")])

        await agent.run("42", "hi")

        tools = llm.calls[0]["tools"]
        names = {tool["function"]["name"] for tool in tools}
        assert "addTracksToPlaylist" in names
        assert all(tool["type"] == "function" for tool in tools)

    @pytest.mark.asyncio
    async def test_history_is_included(self, make_agent):
        agent, llm = make_agent([text("ok")])
        history = [
            {"role": "user", "content": "play daft punk"},
            {"role": "assistant", "content": "Playing."},
            {"role": "assistant", "content": ""},
        ]

        await agent.run("42", "louder", history=history)

        roles = [m["role"] for m in llm.calls[0]["messages"]]
        assert roles == ["system", "user", "assistant", "user"]

    @pytest.mark.asyncio
    async def test_tool_round_trip(self, make_agent, spotify):
        agent, llm = make_agent(
            [
                tool_call("playTrack", '{"spotifyUri": "spotify:track:t1"}'),
                text("Now playing Song 1."),
            ]
        )

        reply = await agent.run("42", "play song 1")

        assert reply == "Now playing Song 1."
        assert spotify.current_uri == "spotify:track:t1"
        second = llm.calls[1]
        assistant = second["messages"][-2]
        assert assistant["tool_calls"][0]["function"] == {
            "name": "playTrack",
            "arguments": '{"spotifyUri": "spotify:track:t1"}',
        }
        assert second["messages"][-1]["tool_call_id"] == "call_1"
        assert tool_outputs(second)[0]["success"] is True

    @pytest.mark.asyncio
    async def test_tool_calls_run_in_order(self, make_agent, spotify):
        spotify.playlists["pl1"] = {
            "name": "Mix",
            "public": False,
            "collaborative": False,
            "description": None,
            "owner": "user1",
            "uris": [],
        }
        turn = tool_call(
            "addTracksToPlaylist",
            '{"playlistId": "pl1", "tracksUris": ["spotify:track:t1"]}',
            call_id="a",
            index=0,
        ) + tool_call(
            "addTracksToPlaylist",
            '{"playlistId": "pl1", "tracksUris": ["spotify:track:t2"]}',
            call_id="b",
            index=1,
        )
        agent, llm = make_agent([turn, text("Added both.")])

        await agent.run("42", "add songs 1 and 2")

        assert spotify.playlists["pl1"]["uris"] == ["spotify:track:t1", "spotify:track:t2"]
        tool_ids = [m["tool_call_id"] for m in llm.calls[1]["messages"] if m["role"] == "tool"]
        assert tool_ids == ["a", "b"]

    @pytest.mark.asyncio
    async def test_invalid_arguments_become_observation(self, make_agent, spotify):
        agent, llm = make_agent(
            [
                tool_call("removeTracksFromPlaylist", '{"playlistId": "pl1", "trackIds": []}'),
                text("Which tracks should I remove?"),
            ]
        )

        reply = await agent.run("42", "remove tracks")

        assert reply == "Which tracks should I remove?"
        observation = tool_outputs(llm.calls[1])[0]
        assert observation["success"] is False
        assert observation["data"]["errorType"] == "VALIDATION"
        assert observation["data"]["errors"][0]["field"] == "trackIds"
        assert spotify.calls == []

    @pytest.mark.asyncio
    async def test_reserved_argument_names_are_rejected(self, make_agent, spotify):
        agent, llm = make_agent(
            [
                tool_call("pauseTrack", '{"context": "x", "self": 1}'),
                text("Pausing needs no options."),
            ]
        )

        await agent.run("42", "pause")

        observation = tool_outputs(llm.calls[1])[0]
        assert observation["success"] is False
        assert observation["data"]["errorType"] == "VALIDATION"
        assert {e["field"] for e in observation["data"]["errors"]} == {"context", "self"}
        assert spotify.calls == []

    @pytest.mark.asyncio
    async def test_tool_failure_becomes_observation(self, make_agent):
        agent, llm = make_agent(
            [
                tool_call("getPlaylistTracks", '{"playlistId": "missing"}'),
                text("That playlist does not exist."),
            ]
        )

        await agent.run("42", "show playlist")

        observation = tool_outputs(llm.calls[1])[0]
        assert observation["success"] is False
        assert observation["data"]["errorType"] == "INTERNAL"

    @pytest.mark.asyncio
    async def test_progress_channel_is_attached(self, make_agent, messenger):
        agent, _ = make_agent(
            [tool_call("pauseTrack", "{}"), text("Paused.")], messenger=messenger
        )

        await agent.run("42", "pause", chat_id=42)

        assert [kind for kind, _ in messenger.events] == ["create", "finalize"]

    @pytest.mark.asyncio
    async def test_no_progress_without_chat(self, make_agent, messenger):
        agent, _ = make_agent(
            [tool_call("pauseTrack", "{}"), text("Paused.")], messenger=messenger
        )

        await agent.run("42", "pause")

        assert messenger.events == []


class TestAgentFailures:
    @pytest.mark.asyncio
    async def test_model_error(self, make_agent):
        agent, _ = make_agent([[{"type": "error", "error": "rate limited"}]])

        with pytest.raises(AgentExecutionError):
            await agent.run("42", "hi")

    @pytest.mark.asyncio
    async def test_provider_exception(self, spotify_factory):
        agent = AgentService(RaisingLLM(), lambda: list_tools(spotify_factory))

        with pytest.raises(AgentExecutionError, match="rate limited") as exc_info:
            await agent.run("42", "hi")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_empty_reply(self, make_agent):
        agent, _ = make_agent([text("   ")])

        with pytest.raises(AgentExecutionError):
            await agent.run("42", "hi")

    @pytest.mark.asyncio
    async def test_unknown_tool(self, make_agent):
        agent, _ = make_agent([tool_call("deleteAccount", "{}")])

        with pytest.raises(AgentExecutionError):
            await agent.run("42", "delete my account")

    @pytest.mark.asyncio
    async def test_malformed_arguments(self, make_agent, spotify):
        agent, _ = make_agent([tool_call("skipTrack", '{"n": ')])

        with pytest.raises(AgentExecutionError):
            await agent.run("42", "skip")
        assert spotify.calls == []

    @pytest.mark.asyncio
    async def test_arguments_must_be_an_object(self, make_agent):
        agent, _ = make_agent([tool_call("skipTrack", "[1]")])

        with pytest.raises(AgentExecutionError):
            await agent.run("42", "skip")

    @pytest.mark.asyncio
    async def test_iteration_cap(self, make_agent):
        turns = [tool_call("getCurrentTrack", "{}", call_id=f"c{i}") for i in range(3)]
        agent, llm = make_agent(turns, max_iterations=3)

        with pytest.raises(AgentExecutionError):
            await agent.run("42", "loop forever")
        assert len(llm.calls) == 3
