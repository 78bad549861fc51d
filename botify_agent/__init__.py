"""
Botify Agent - a Telegram bot that controls Spotify through a tool-calling LLM agent.

This package provides the Spotify tools, the agent that calls them, and the
services connecting the agent to Telegram, Spotify OAuth and MongoDB.
"""
# Client interface (main entry point)
from botify_agent.client.botify_agent import BotifyAgent

# Factory for creating agent systems
from botify_agent.factories.agent_factory import BotifyFactory

# Useful tools and utilities
from botify_agent.plugins.registry import ToolRegistry
from botify_agent.plugins.tools import SpotifyTool, list_tools
from botify_agent.interfaces.plugins.plugins import Tool

# Package metadata
__all__ = [
    # Main client interfaces
    "BotifyAgent",
    # Factories
    "BotifyFactory",
    # Tools
    "ToolRegistry",
    "SpotifyTool",
    "Tool",
    "list_tools",
]
