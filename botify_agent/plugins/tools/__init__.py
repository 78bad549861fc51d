"""
Tools for the Botify Agent system.

This package contains the SpotifyTool base class and the Spotify tools the
agent can call.
"""
from typing import List

from botify_agent.plugins.tools.playback import (
    AddToQueueTool,
    GetCurrentTrackTool,
    PauseTrackTool,
    PlayTrackTool,
    PreviousTrackTool,
    ResumeTrackTool,
    SkipTrackTool,
)
from botify_agent.plugins.tools.playlists import (
    AddTracksToPlaylistTool,
    ChangePlaylistDetailsTool,
    CreatePlaylistTool,
    GetPlaylistTracksTool,
    GetUserPlaylistsTool,
    RemoveTracksFromPlaylistTool,
)
from botify_agent.plugins.tools.search import SearchTool
from botify_agent.plugins.tools.spotify_tool import (
    NO_ACTIVE_DEVICE_MESSAGE,
    SpotifyClientFactory,
    SpotifyTool,
)

TOOL_CLASSES = [
    SearchTool,
    PlayTrackTool,
    PauseTrackTool,
    ResumeTrackTool,
    SkipTrackTool,
    PreviousTrackTool,
    AddToQueueTool,
    GetCurrentTrackTool,
    CreatePlaylistTool,
    GetUserPlaylistsTool,
    GetPlaylistTracksTool,
    AddTracksToPlaylistTool,
    RemoveTracksFromPlaylistTool,
    ChangePlaylistDetailsTool,
]


def list_tools(spotify_factory: SpotifyClientFactory) -> List[SpotifyTool]:
    """Instantiate every Spotify tool around one client factory."""
    return [tool_class(spotify_factory) for tool_class in TOOL_CLASSES]
