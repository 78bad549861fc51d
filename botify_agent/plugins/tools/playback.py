"""
Playback control tools.

Tools that change what is playing need an active device; the base class
resolves it before ``run`` is called.
"""
from botify_agent.domains.tools import ToolResult
from botify_agent.plugins.schemas import AddToQueueParams, PlayTrackParams, SkipTrackParams
from botify_agent.plugins.tools.spotify_tool import SpotifyTool

PLAY_TRACK_DESCRIPTION = """Play a specific track, album, artist or playlist on Spotify.

**Function**: Starts playback of the given Spotify URI on the active device
**Requirements**: Active Spotify device
**Parameters**:
- spotifyUri (required): Spotify URI to play (e.g., "spotify:track:4iV5W9uYEdYUVa79Axb7Rh")
**Returns**: Confirmation message, or a notice if no device is active

Use this to play specific songs. Search first when you only know the name."""

PAUSE_TRACK_DESCRIPTION = """Pause the currently playing track on Spotify.

**Function**: Stops current playback without changing track position
**Requirements**: Active Spotify device with current playback
**Parameters**: None
**Returns**: Confirmation message, or a notice if no device is active

Use this when user wants to pause or stop their music temporarily."""

RESUME_TRACK_DESCRIPTION = """Resume playback of the current track on Spotify.

**Function**: Continues playback from where it was paused
**Requirements**: Active Spotify device with paused playback
**Parameters**: None
**Returns**: Confirmation message, or a notice if no device is active

Use this when user wants to continue or resume their paused music."""

SKIP_TRACK_DESCRIPTION = """Skip to the next track in the current Spotify playback queue.

**Function**: Advances playback to the next track
**Requirements**: Active Spotify device with current playback
**Parameters**:
- n (optional): Number of tracks to skip (default: 1, max: 10)
**Returns**: Confirmation message, or a notice if no device is active

Use this when user wants to skip songs or move forward in their queue."""

PREVIOUS_TRACK_DESCRIPTION = """Skip to the previous track in the current Spotify playback.

**Function**: Goes back to the previous track in queue/history
**Requirements**: Active Spotify device with current playback
**Parameters**: None
**Returns**: Confirmation message, or a notice if no device is active

Use this when user wants to go back to the previous song."""

ADD_TO_QUEUE_DESCRIPTION = """Add a track to the current Spotify playback queue.

**Function**: Adds specified track to end of current queue
**Requirements**: Valid track URI
**Parameters**:
- spotifyUri (required): Spotify URI of track to queue (e.g., "spotify:track:4iV5W9uYEdYUVa79Axb7Rh")
**Returns**: Confirmation message with track added

Use this when user wants to queue songs for later playback without interrupting current track."""

GET_CURRENT_TRACK_DESCRIPTION = """Get information about the currently playing track on Spotify.

**Function**: Retrieves current track details and playback status
**Requirements**: Active Spotify session (may have no current track)
**Parameters**: None
**Returns**: JSON with track info and playback status, or "No track currently playing"

Use this to show what's currently playing or check playback status."""


class PlayTrackTool(SpotifyTool):
    schema = PlayTrackParams
    requires_device = True

    def __init__(self, spotify_factory):
        super().__init__(
            name="playTrack", description=PLAY_TRACK_DESCRIPTION, spotify_factory=spotify_factory
        )

    def get_start_message(self, params: PlayTrackParams) -> str:
        return f"Starting playback of {params.spotify_uri}..."

    async def run(self, context, spotify, params: PlayTrackParams, device=None) -> ToolResult:
        await spotify.resume_playback(device, uri=params.spotify_uri)
        return ToolResult(
            success=True,
            message=f"Started playing {params.spotify_uri} on {device.name}",
            data={"spotifyUri": params.spotify_uri, "device": device.name},
        )


class PauseTrackTool(SpotifyTool):
    requires_device = True

    def __init__(self, spotify_factory):
        super().__init__(
            name="pauseTrack", description=PAUSE_TRACK_DESCRIPTION, spotify_factory=spotify_factory
        )

    def get_start_message(self, params) -> str:
        return "Pausing playback..."

    async def run(self, context, spotify, params, device=None) -> ToolResult:
        state = await spotify.get_playback_state()
        if state is None or not state.is_playing:
            return ToolResult(
                success=True,
                message="Playback is already paused",
                data={"device": device.name, "changed": False},
            )

        await spotify.pause_playback(device)
        return ToolResult(
            success=True,
            message=f"Paused playback on {device.name}",
            data={"device": device.name, "changed": True},
        )


class ResumeTrackTool(SpotifyTool):
    requires_device = True

    def __init__(self, spotify_factory):
        super().__init__(
            name="resumeTrack", description=RESUME_TRACK_DESCRIPTION, spotify_factory=spotify_factory
        )

    def get_start_message(self, params) -> str:
        return "Resuming playback..."

    async def run(self, context, spotify, params, device=None) -> ToolResult:
        state = await spotify.get_playback_state()
        if state is not None and state.is_playing:
            return ToolResult(
                success=True,
                message="Playback is already running",
                data={"device": device.name, "changed": False},
            )

        await spotify.resume_playback(device)
        return ToolResult(
            success=True,
            message=f"Resumed playback on {device.name}",
            data={"device": device.name, "changed": True},
        )


class SkipTrackTool(SpotifyTool):
    schema = SkipTrackParams
    requires_device = True

    def __init__(self, spotify_factory):
        super().__init__(
            name="skipTrack", description=SKIP_TRACK_DESCRIPTION, spotify_factory=spotify_factory
        )

    def get_start_message(self, params: SkipTrackParams) -> str:
        return "Skipping to the next track..."

    async def run(self, context, spotify, params: SkipTrackParams, device=None) -> ToolResult:
        await spotify.skip_track(device, n=params.n)
        noun = "track" if params.n == 1 else "tracks"
        return ToolResult(
            success=True,
            message=f"Skipped {params.n} {noun}",
            data={"skipped": params.n, "device": device.name},
        )


class PreviousTrackTool(SpotifyTool):
    requires_device = True

    def __init__(self, spotify_factory):
        super().__init__(
            name="previousTrack",
            description=PREVIOUS_TRACK_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params) -> str:
        return "Going back to the previous track..."

    async def run(self, context, spotify, params, device=None) -> ToolResult:
        await spotify.previous_track(device)
        return ToolResult(
            success=True,
            message="Went back to the previous track",
            data={"device": device.name},
        )


class AddToQueueTool(SpotifyTool):
    schema = AddToQueueParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="addToQueue", description=ADD_TO_QUEUE_DESCRIPTION, spotify_factory=spotify_factory
        )

    def get_start_message(self, params: AddToQueueParams) -> str:
        return f"Adding {params.spotify_uri} to the queue..."

    async def run(self, context, spotify, params: AddToQueueParams, device=None) -> ToolResult:
        device = await spotify.find_active_device()
        await spotify.add_to_queue(params.spotify_uri, device=device)
        return ToolResult(
            success=True,
            message=f"Added {params.spotify_uri} to the queue",
            data={"spotifyUri": params.spotify_uri},
        )


class GetCurrentTrackTool(SpotifyTool):
    def __init__(self, spotify_factory):
        super().__init__(
            name="getCurrentTrack",
            description=GET_CURRENT_TRACK_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params) -> str:
        return "Checking what is playing..."

    async def run(self, context, spotify, params, device=None) -> ToolResult:
        state = await spotify.get_current_track()
        if state is None or state.item is None:
            return ToolResult(
                success=True,
                message="No track currently playing",
                data={"isPlaying": False},
            )

        track = state.item
        artists = ", ".join(artist.name for artist in track.artists)
        return ToolResult(
            success=True,
            message=f"Now playing {track.name} by {artists}" if artists else f"Now playing {track.name}",
            data={
                "isPlaying": state.is_playing,
                "track": track.summary(),
                "progressMs": state.progress_ms,
                "device": state.device.name if state.device else None,
            },
        )
