"""
Domain models shared by the tool layer and the agent executor.
"""
import json
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from botify_agent.interfaces.providers.messenger import StatusMessenger

__all__ = [
    "ToolKind",
    "ToolResult",
    "ProgressChannel",
    "ExecutionContext",
]


class ToolKind(str, Enum):
    """Tag distinguishing tools that take arguments from those that do not."""
    PARAMETERIZED = "parameterized"
    SIMPLE = "simple"


class ToolResult(BaseModel):
    """Structured outcome of a tool call, returned to the agent as JSON."""

    success: bool = Field(..., description="Whether the operation completed")
    message: str = Field(..., description="Short human readable summary")
    data: Optional[Dict[str, Any]] = Field(None, description="Structured payload")

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2, default=str)


class ProgressChannel(BaseModel):
    """Where live progress for a tool call should be posted."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    chat_id: Union[int, str]
    messenger: StatusMessenger


class ExecutionContext(BaseModel):
    """Per-invocation context threaded through every tool call."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    user_id: str = Field(..., description="User the tools act for")
    progress: Optional[ProgressChannel] = Field(
        None, description="Optional status message side channel"
    )
