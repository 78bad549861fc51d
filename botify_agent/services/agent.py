"""
Agent service implementation.

This service binds the Spotify tools to the language model and drives the
tool-calling loop of one agent turn.
"""
import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from botify_agent.domains.errors import (
    AgentExecutionError,
    AppError,
    ErrorContext,
    ValidationError,
    handle_error,
    user_friendly_message,
)
from botify_agent.domains.tools import ExecutionContext, ProgressChannel, ToolResult
from botify_agent.interfaces.plugins.plugins import Tool
from botify_agent.interfaces.providers.llm import LLMProvider
from botify_agent.interfaces.providers.messenger import StatusMessenger
from botify_agent.interfaces.services.agent import AgentService as AgentServiceInterface
from botify_agent.plugins.registry import ToolRegistry

logger = logging.getLogger(__name__)

__all__ = ["AgentService", "SYSTEM_PROMPT"]

DEFAULT_MAX_ITERATIONS = 8

SYSTEM_PROMPT = """<task>
You are Botify, a Spotify agent.
Your goal is to assist users with Spotify-related tasks such as controlling playback, searching for tracks, and managing playlists by automating processes that would otherwise need a UI.
</task>

<instructions>
Whenever you receive a request, use the tools available to you to perform it, following each tool description.
Search first when the user names a song, artist, album or playlist instead of giving a Spotify URI or ID.
You will always respond in the user input language.
You will not answer questions that are not related to Spotify.
You will not perform any actions that are not related to Spotify.
You will not provide any personal opinions or preferences.
If a tool reports a problem, explain it to the user in one short sentence.
</instructions>

<output>
Your output will be a Telegram message. You can use Markdown formatting.
Always respond in a concise manner.
</output>"""


class AgentService(AgentServiceInterface):
    """Runs one Spotify agent turn against a tool-calling language model."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        tool_provider: Callable[[], Iterable[Tool]],
        model: Optional[str] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        messenger: Optional[StatusMessenger] = None,
        system_prompt: Optional[str] = None,
    ):
        """Initialize the agent service.

        Args:
            llm_provider: Provider for language model interactions
            tool_provider: Returns the tools to bind for a turn
            model: Model name for the LLM provider
            max_iterations: Maximum model calls per turn
            messenger: Optional status messenger for tool progress
            system_prompt: Override of the built-in system instruction
        """
        self.llm_provider = llm_provider
        self.tool_provider = tool_provider
        self.model = model
        self.max_iterations = max_iterations
        self.messenger = messenger
        self.system_prompt = system_prompt or SYSTEM_PROMPT

    def get_system_prompt(self) -> str:
        return self.system_prompt

    async def run(
        self,
        user_id: str,
        user_input: str,
        history: Optional[List[Dict[str, Any]]] = None,
        chat_id: Optional[Union[int, str]] = None,
    ) -> str:
        """Run one agent turn and return the assistant's reply.

        Args:
            user_id: User the tools act for
            user_input: The user's message
            history: Earlier messages as ``{"role", "content"}`` dicts, oldest first
            chat_id: Chat to post tool progress to, when a messenger is configured

        Returns:
            The final reply text

        Raises:
            AgentExecutionError: If the model fails or never produces a reply
        """
        registry = ToolRegistry(self.tool_provider())

        progress = None
        if self.messenger is not None and chat_id is not None:
            progress = ProgressChannel(chat_id=chat_id, messenger=self.messenger)
        context = ExecutionContext(user_id=user_id, progress=progress)

        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": self.get_system_prompt()}
        ]
        for entry in history or []:
            if entry.get("content"):
                messages.append({"role": entry["role"], "content": entry["content"]})
        messages.append({"role": "user", "content": user_input})

        tools = [
            {
                "type": "function",
                "function": {
                    "name": tool["name"],
                    "description": tool.get("description", ""),
                    "parameters": tool.get("parameters", {}),
                },
            }
            for tool in registry.get_tool_definitions()
        ]

        for iteration in range(self.max_iterations):
            text, tool_calls = await self._stream_turn(messages, tools)

            if not tool_calls:
                reply = text.strip()
                if not reply:
                    raise AgentExecutionError("The language model returned an empty reply")
                logger.info(f"Agent turn for user {user_id} finished after {iteration + 1} model call(s)")
                return reply

            assistant_tool_calls = []
            for idx, tc in sorted(tool_calls.items()):
                name = (tc.get("name") or "").strip()
                if not name:
                    raise AgentExecutionError(f"Tool call at index {idx} has no name")
                tc["id"] = tc.get("id") or f"call_{idx}"
                assistant_tool_calls.append(
                    {
                        "id": tc["id"],
                        "type": "function",
                        "function": {"name": name, "arguments": tc.get("arguments") or "{}"},
                    }
                )
            messages.append(
                {"role": "assistant", "content": text or None, "tool_calls": assistant_tool_calls}
            )

            # Sequential, in the order the model emitted them
            for call in assistant_tool_calls:
                output = await self._execute_tool_call(
                    registry,
                    context,
                    call["function"]["name"],
                    call["function"]["arguments"],
                )
                messages.append(
                    {"role": "tool", "tool_call_id": call["id"], "content": output}
                )

        raise AgentExecutionError(
            f"No reply after {self.max_iterations} model calls"
        )

    async def _stream_turn(
        self, messages: List[Dict[str, Any]], tools: List[Dict[str, Any]]
    ) -> Tuple[str, Dict[int, Dict[str, Any]]]:
        """Consume one model stream; returns text and tool calls by index."""
        text = ""
        # Aggregate tool calls by index and merge late IDs
        tool_calls: Dict[int, Dict[str, Any]] = {}

        try:
            async for event in self.llm_provider.chat_stream(
                messages=messages,
                model=self.model,
                tools=tools or None,
            ):
                etype = event.get("type")
                if etype == "content":
                    text += event.get("delta", "")
                elif etype == "tool_call_delta":
                    index_raw = event.get("index")
                    try:
                        index = int(index_raw) if index_raw is not None else 0
                    except (TypeError, ValueError):
                        index = 0
                    entry = tool_calls.setdefault(
                        index, {"id": None, "name": None, "arguments": ""}
                    )
                    if event.get("id") and not entry.get("id"):
                        entry["id"] = event["id"]
                    if event.get("name") and not entry.get("name"):
                        entry["name"] = event["name"]
                    entry["arguments"] += event.get("arguments_delta") or ""
                elif etype == "error":
                    raise AgentExecutionError(
                        f"Language model error: {event.get('error')}"
                    )
        except AgentExecutionError:
            raise
        except Exception as e:
            logger.exception(f"Language model stream failed: {e}")
            raise AgentExecutionError(f"Language model error: {e}") from e

        return text, tool_calls

    async def _execute_tool_call(
        self,
        registry: ToolRegistry,
        context: ExecutionContext,
        name: str,
        arguments: str,
    ) -> str:
        """Run one tool call and return the observation for the model."""
        tool = registry.get_tool(name)
        if tool is None:
            raise AgentExecutionError(
                f"Unknown tool requested: {name}. Available tools: {registry.list_all_tools()}"
            )

        try:
            params = json.loads(arguments or "{}")
        except json.JSONDecodeError as e:
            raise AgentExecutionError(f"Malformed arguments for tool {name}: {e}") from e
        if not isinstance(params, dict):
            raise AgentExecutionError(f"Arguments for tool {name} are not an object")

        logger.info(f"Executing tool '{name}' for user {context.user_id} with params: {params}")
        try:
            return await tool.execute(context, params)
        except AppError as e:
            error = e
            logger.warning(f"Tool '{name}' failed with {e.error_type.value}: {e.message}")
        except Exception as e:
            error = handle_error(e, ErrorContext(user_id=context.user_id, operation=name))

        data: Dict[str, Any] = {"errorType": error.error_type.value}
        if isinstance(error, ValidationError) and error.errors:
            data["errors"] = error.errors
        return ToolResult(
            success=False, message=user_friendly_message(error), data=data
        ).to_json()
