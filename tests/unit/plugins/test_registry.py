"""
Tests for the ToolRegistry implementation.
"""
from unittest.mock import MagicMock

import pytest

from botify_agent.interfaces.plugins.plugins import Tool
from botify_agent.plugins.registry import ToolRegistry
from botify_agent.plugins.tools import TOOL_CLASSES, list_tools


def make_tool(name: str = "test_tool") -> MagicMock:
    tool = MagicMock(spec=Tool)
    tool.name = name
    tool.description = f"{name} description"
    tool.get_schema.return_value = {
        "type": "object",
        "properties": {"param1": {"type": "string"}},
    }
    return tool


@pytest.fixture
def mock_tool():
    """Create a mock tool for testing."""
    return make_tool()


class TestToolRegistry:
    """Test suite for ToolRegistry."""

    def test_init_default(self):
        registry = ToolRegistry()
        assert registry.list_all_tools() == []

    def test_init_with_tools(self):
        registry = ToolRegistry([make_tool("a"), make_tool("b")])
        assert registry.list_all_tools() == ["a", "b"]

    def test_register_tool_success(self, mock_tool):
        registry = ToolRegistry()

        assert registry.register_tool(mock_tool) is True
        assert registry.get_tool("test_tool") is mock_tool

    def test_register_duplicate_is_rejected(self, mock_tool):
        registry = ToolRegistry([mock_tool])
        duplicate = make_tool("test_tool")

        assert registry.register_tool(duplicate) is False
        assert registry.get_tool("test_tool") is mock_tool
        assert registry.list_all_tools() == ["test_tool"]

    def test_register_nameless_tool_is_rejected(self):
        registry = ToolRegistry()
        assert registry.register_tool(make_tool("")) is False
        assert registry.list_all_tools() == []

    def test_get_missing_tool(self):
        assert ToolRegistry().get_tool("missing") is None

    def test_get_tool_definitions(self, mock_tool):
        registry = ToolRegistry([mock_tool])

        assert registry.get_tool_definitions() == [
            {
                "name": "test_tool",
                "description": "test_tool description",
                "parameters": {
                    "type": "object",
                    "properties": {"param1": {"type": "string"}},
                },
            }
        ]


class TestSpotifyToolSet:
    """The full Spotify tool set registers without conflicts."""

    def test_all_tools_register(self, spotify_factory):
        registry = ToolRegistry(list_tools(spotify_factory))
        assert len(registry.list_all_tools()) == len(TOOL_CLASSES)

    def test_tool_names(self, spotify_factory):
        names = set(ToolRegistry(list_tools(spotify_factory)).list_all_tools())
        assert names == {
            "search",
            "playTrack",
            "pauseTrack",
            "resumeTrack",
            "skipTrack",
            "previousTrack",
            "addToQueue",
            "getCurrentTrack",
            "createPlaylist",
            "getUserPlaylists",
            "getPlaylistTracks",
            "addTracksToPlaylist",
            "removeTracksFromPlaylist",
            "changePlaylistDetails",
        }

    def test_every_definition_is_an_object_schema(self, spotify_factory):
        for definition in ToolRegistry(list_tools(spotify_factory)).get_tool_definitions():
            assert definition["description"]
            assert definition["parameters"]["type"] == "object"
