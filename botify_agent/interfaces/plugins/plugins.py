"""
Tool interfaces.

These interfaces define the contract every agent-callable action satisfies
and the registry that exposes them to the language model.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from botify_agent.domains.tools import ExecutionContext, ToolKind


class Tool(ABC):
    """Interface for tools that can be used by the agent."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get the LLM-facing usage description of the tool."""
        pass

    @property
    @abstractmethod
    def kind(self) -> ToolKind:
        """Whether the tool takes arguments."""
        pass

    @abstractmethod
    def get_schema(self) -> Dict[str, Any]:
        """Get the JSON schema for the tool parameters."""
        pass

    @abstractmethod
    async def execute(
        self, context: ExecutionContext, params: Optional[Dict[str, Any]] = None
    ) -> str:
        """Execute the tool and return its JSON encoded result."""
        pass


class ToolRegistry(ABC):
    """Interface for the tool registry."""

    @abstractmethod
    def register_tool(self, tool: Tool) -> bool:
        """Register a tool in the registry."""
        pass

    @abstractmethod
    def get_tool(self, tool_name: str) -> Optional[Tool]:
        """Get a tool by name."""
        pass

    @abstractmethod
    def get_tool_definitions(self) -> List[Dict[str, Any]]:
        """Get name, description and parameter schema of every tool."""
        pass

    @abstractmethod
    def list_all_tools(self) -> List[str]:
        """List all registered tools."""
        pass
