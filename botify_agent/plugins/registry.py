"""
Tool registry for the Botify Agent system.

This module implements the concrete ToolRegistry that holds the tools bound
to one agent run and describes them to the language model.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from botify_agent.interfaces.plugins.plugins import Tool
from botify_agent.interfaces.plugins.plugins import (
    ToolRegistry as ToolRegistryInterface,
)

logger = logging.getLogger(__name__)


class ToolRegistry(ToolRegistryInterface):
    """Instance-based registry of uniquely named tools."""

    def __init__(self, tools: Optional[Iterable[Tool]] = None):
        """Initialize the registry, registering any tools given."""
        self._tools: Dict[str, Tool] = {}
        for tool in tools or []:
            self.register_tool(tool)

    def register_tool(self, tool: Tool) -> bool:
        """Register a tool; a second tool with a taken name is rejected."""
        if not tool.name:
            logger.error("Error registering tool: tool has no name")
            return False
        if tool.name in self._tools:
            logger.error(
                f"Error registering tool: {tool.name} is already registered. "
                f"Available tools: {list(self._tools.keys())}"
            )
            return False

        self._tools[tool.name] = tool
        logger.debug(f"Successfully registered tool: {tool.name}")
        return True

    def get_tool(self, tool_name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(tool_name)

    def get_tool_definitions(self) -> List[Dict[str, Any]]:
        """Get name, description and parameter schema of every tool."""
        tools = [
            {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.get_schema(),
            }
            for tool in self._tools.values()
        ]
        logger.debug(f"Tool definitions: {[t['name'] for t in tools]}")
        return tools

    def list_all_tools(self) -> List[str]:
        """List all registered tools."""
        return list(self._tools.keys())
