"""
SpotifyTool implementation for the Botify Agent system.

This module provides the base class shared by every Spotify tool. It owns
the execution contract: argument validation, the optional status message,
Spotify client acquisition, active device resolution, error classification
and result serialization. Subclasses only implement ``run``.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Type

from botify_agent.domains.errors import (
    AppError,
    ErrorContext,
    ValidationError,
    handle_error,
    user_friendly_message,
)
from botify_agent.domains.spotify import Device
from botify_agent.domains.tools import ExecutionContext, ToolKind, ToolResult
from botify_agent.interfaces.plugins.plugins import Tool
from botify_agent.interfaces.providers.spotify import SpotifyProvider
from botify_agent.plugins.schemas import ToolParams, json_schema, validate_params

logger = logging.getLogger(__name__)

# Builds an authenticated Spotify client for a user id.
SpotifyClientFactory = Callable[[str], Awaitable[SpotifyProvider]]

NO_ACTIVE_DEVICE_MESSAGE = (
    "No active device found. Please open Spotify on a device and start playing something."
)


class SpotifyTool(Tool):
    """Base class for tools acting on a user's Spotify account.

    Set ``schema`` to a parameter model for tools that take arguments; tools
    without a schema accept none. Set ``requires_device`` for tools that need
    an active playback device.
    """

    schema: Optional[Type[ToolParams]] = None
    requires_device: bool = False

    def __init__(self, name: str, description: str, spotify_factory: SpotifyClientFactory):
        """Initialize the tool with name, description and a client factory."""
        self._name = name
        self._description = description
        self._spotify_factory = spotify_factory

    @property
    def name(self) -> str:
        """Get the name of the tool."""
        return self._name

    @property
    def description(self) -> str:
        """Get the description of the tool."""
        return self._description

    @property
    def kind(self) -> ToolKind:
        return ToolKind.SIMPLE if self.schema is None else ToolKind.PARAMETERIZED

    def get_schema(self) -> Dict[str, Any]:
        """Return the JSON schema for this tool's parameters."""
        if self.schema is None:
            return {"type": "object", "properties": {}, "additionalProperties": False}
        return json_schema(self.schema)

    def validate(self, params: Dict[str, Any]) -> Optional[ToolParams]:
        """Validate raw arguments, raising ValidationError on failure."""
        if self.schema is not None:
            return validate_params(self.schema, params)
        if params:
            errors = [
                {"field": field, "constraint": "unexpected argument"} for field in params
            ]
            raise ValidationError(f"{self.name} takes no arguments", errors=errors)
        return None

    def get_start_message(self, params: Optional[ToolParams]) -> str:
        """Status text shown when the tool starts working."""
        return f"Running {self.name}..."

    def get_success_message(self, result: ToolResult) -> str:
        """Status text shown when the tool finished."""
        return result.message

    def get_failure_message(self, error: AppError) -> str:
        """Status text shown when the tool failed."""
        return f"Could not complete {self.name}. {user_friendly_message(error)}"

    async def run(
        self,
        context: ExecutionContext,
        spotify: SpotifyProvider,
        params: Optional[ToolParams],
        device: Optional[Device] = None,
    ) -> ToolResult:
        """Perform the Spotify operation. Override in subclasses."""
        raise NotImplementedError("Tool must implement run method")

    async def report(self, context: ExecutionContext, text: str) -> None:
        """Update the status message mid-operation, if a channel is attached."""
        progress = context.progress
        if progress is None:
            return
        try:
            await progress.messenger.update_status_message(
                context.user_id, progress.chat_id, text
            )
        except Exception as e:
            logger.warning(f"Failed to update status message for {self.name}: {e}")

    async def execute(
        self, context: ExecutionContext, params: Optional[Dict[str, Any]] = None
    ) -> str:
        """Execute the tool and return the ToolResult as JSON.

        Raises:
            ValidationError: If the arguments do not match the schema; nothing
                else runs in that case
            AppError: Any other failure, classified
        """
        try:
            validated = self.validate(params or {})
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {self.name}: {e.message}")
            raise

        progress = context.progress
        if progress is not None:
            await self._start_status(context, validated)

        result: Optional[ToolResult] = None
        failure: Optional[AppError] = None
        try:
            logger.info(f"Executing {self.name} for user {context.user_id}")
            try:
                spotify = await self._spotify_factory(context.user_id)

                device = None
                if self.requires_device:
                    device = await spotify.find_active_device()
                    if device is None or device.id is None:
                        logger.info(f"No active device for user {context.user_id}")
                        result = ToolResult(
                            success=True,
                            message=NO_ACTIVE_DEVICE_MESSAGE,
                            data={"deviceFound": False},
                        )
                        return result.to_json()

                result = await self.run(context, spotify, validated, device)
            except Exception as e:
                failure = handle_error(
                    e, ErrorContext(user_id=context.user_id, operation=self.name)
                )
                if failure is e:
                    raise
                raise failure from e

            logger.info(f"Successfully executed {self.name}")
            return result.to_json()
        finally:
            if progress is not None:
                await self._finalize_status(context, result, failure)

    async def _start_status(
        self, context: ExecutionContext, params: Optional[ToolParams]
    ) -> None:
        progress = context.progress
        try:
            await progress.messenger.create_status_message(
                context.user_id, progress.chat_id, self.get_start_message(params)
            )
        except Exception as e:
            logger.warning(f"Failed to create status message for {self.name}: {e}")

    async def _finalize_status(
        self,
        context: ExecutionContext,
        result: Optional[ToolResult],
        failure: Optional[AppError],
    ) -> None:
        progress = context.progress
        if failure is not None or result is None:
            text = self.get_failure_message(failure or AppError("Tool did not complete"))
        else:
            text = self.get_success_message(result)
        try:
            await progress.messenger.finalize_status_message(
                context.user_id, progress.chat_id, text
            )
        except Exception as e:
            logger.error(f"Failed to finalize status message for {self.name}: {e}")
