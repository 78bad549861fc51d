"""
Playlist management tools.
"""
from typing import List

from botify_agent.domains.tools import ToolResult
from botify_agent.plugins.schemas import (
    AddTracksToPlaylistParams,
    ChangePlaylistDetailsParams,
    CreatePlaylistParams,
    GetPlaylistTracksParams,
    GetUserPlaylistsParams,
    RemoveTracksFromPlaylistParams,
)
from botify_agent.plugins.tools.spotify_tool import SpotifyTool

CREATE_PLAYLIST_DESCRIPTION = """Create a new playlist for the user on Spotify.

**Function**: Creates empty playlist with specified settings
**Requirements**: Authenticated Spotify user
**Parameters**:
- name (required): Playlist name
- isPublic (optional): Whether playlist is public (default: false)
- collaborative (optional): Whether others can edit (default: false)
- description (optional): Playlist description text
**Returns**: Confirmation with playlist name and ID

Use this when user wants to create new playlists for organizing music."""

GET_USER_PLAYLISTS_DESCRIPTION = """Get the current user's playlists from Spotify.

**Function**: Retrieves list of user's playlists with metadata
**Requirements**: Authenticated Spotify user
**Parameters**:
- limit (optional): Number of playlists to return (1-50, default: 20)
**Returns**: JSON array of playlists with their IDs

Use this to show user their existing playlists or to find a playlist ID by name."""

GET_PLAYLIST_TRACKS_DESCRIPTION = """Get all tracks from a specific Spotify playlist.

**Function**: Retrieves track list from specified playlist, in playlist order
**Requirements**: Valid playlist ID
**Parameters**:
- playlistId (required): Spotify playlist ID (NOT name or URL, just the ID like "37i9dQZF1DXcBWIGoYBM5M")
**Returns**: JSON array of tracks with metadata

Use this to show contents of playlists or when user wants to see what's in a specific playlist."""

ADD_TRACKS_DESCRIPTION = """Add tracks to an existing Spotify playlist.

**Function**: Adds multiple tracks to specified playlist
**Requirements**: Valid playlist ID and track URIs
**Parameters**:
- playlistId (required): Spotify playlist ID
- tracksUris (required): Array of Spotify track URIs to add (1-100 tracks)
- position (optional): Zero-based position to insert tracks (default: end of playlist)
**Returns**: Confirmation with number of tracks added

Use this when user wants to add songs to their existing playlists."""

REMOVE_TRACKS_DESCRIPTION = """Remove tracks from an existing Spotify playlist.

**Function**: Removes every occurrence of the specified tracks from the playlist
**Requirements**: Valid playlist ID and track URIs
**Parameters**:
- playlistId (required): Spotify playlist ID
- trackIds (required): Array of Spotify track URIs (or track IDs) to remove (1-100)
**Returns**: Confirmation with number of tracks removed

Use this when user wants to clean up or remove songs from their playlists."""

CHANGE_PLAYLIST_DETAILS_DESCRIPTION = """Update the name and/or description of an existing Spotify playlist.

**Function**: Modifies playlist metadata (name, description)
**Requirements**: Valid playlist ID and user ownership/edit rights
**Parameters**:
- playlistId (required): Spotify playlist ID
- name (optional): New playlist name
- description (optional): New playlist description
**Returns**: Confirmation of playlist details updated

Use this when user wants to rename playlists or update their descriptions."""


def to_track_uri(track: str) -> str:
    """Accept a bare track id where a track URI is expected."""
    if track.startswith("spotify:"):
        return track
    return f"spotify:track:{track}"


class CreatePlaylistTool(SpotifyTool):
    schema = CreatePlaylistParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="createPlaylist",
            description=CREATE_PLAYLIST_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params: CreatePlaylistParams) -> str:
        return f'Creating playlist "{params.name}"...'

    async def run(self, context, spotify, params: CreatePlaylistParams, device=None) -> ToolResult:
        user = await spotify.get_user_profile()
        await self.report(context, f'Creating playlist "{params.name}" for {user.display_name or user.id}...')

        playlist = await spotify.create_playlist(
            user.id,
            params.name,
            public=params.is_public,
            collaborative=params.collaborative,
            description=params.description,
        )
        return ToolResult(
            success=True,
            message=f'Created playlist "{playlist.name}"',
            data={
                "playlistId": playlist.id,
                "name": playlist.name,
                "uri": playlist.uri,
                "public": params.is_public,
                "collaborative": params.collaborative,
            },
        )


class GetUserPlaylistsTool(SpotifyTool):
    schema = GetUserPlaylistsParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="getUserPlaylists",
            description=GET_USER_PLAYLISTS_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params: GetUserPlaylistsParams) -> str:
        return "Fetching your playlists..."

    async def run(self, context, spotify, params: GetUserPlaylistsParams, device=None) -> ToolResult:
        playlists = await spotify.get_current_user_playlists(limit=params.limit)
        return ToolResult(
            success=True,
            message=f"Found {len(playlists)} playlists",
            data={
                "playlistsCount": len(playlists),
                "playlists": [playlist.summary() for playlist in playlists],
            },
        )


class GetPlaylistTracksTool(SpotifyTool):
    schema = GetPlaylistTracksParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="getPlaylistTracks",
            description=GET_PLAYLIST_TRACKS_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params: GetPlaylistTracksParams) -> str:
        return "Loading playlist tracks..."

    async def run(self, context, spotify, params: GetPlaylistTracksParams, device=None) -> ToolResult:
        tracks = await spotify.get_playlist_tracks(params.playlist_id)
        return ToolResult(
            success=True,
            message=f"Playlist {params.playlist_id} has {len(tracks)} tracks",
            data={
                "playlistId": params.playlist_id,
                "tracksCount": len(tracks),
                "tracks": [track.summary() for track in tracks],
            },
        )


class AddTracksToPlaylistTool(SpotifyTool):
    schema = AddTracksToPlaylistParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="addTracksToPlaylist",
            description=ADD_TRACKS_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params: AddTracksToPlaylistParams) -> str:
        return f"Adding {len(params.tracks_uris)} tracks to the playlist..."

    async def run(self, context, spotify, params: AddTracksToPlaylistParams, device=None) -> ToolResult:
        snapshot_id = await spotify.add_tracks_to_playlist(
            params.playlist_id, list(params.tracks_uris), position=params.position
        )
        count = len(params.tracks_uris)
        message = f"Added {count} tracks to playlist {params.playlist_id}"
        if params.position is not None:
            message += f" at position {params.position}"
        return ToolResult(
            success=True,
            message=message,
            data={
                "playlistId": params.playlist_id,
                "tracksAdded": count,
                "position": params.position,
                "snapshotId": snapshot_id,
            },
        )


class RemoveTracksFromPlaylistTool(SpotifyTool):
    schema = RemoveTracksFromPlaylistParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="removeTracksFromPlaylist",
            description=REMOVE_TRACKS_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params: RemoveTracksFromPlaylistParams) -> str:
        return f"Removing {len(params.track_ids)} tracks from the playlist..."

    async def run(
        self, context, spotify, params: RemoveTracksFromPlaylistParams, device=None
    ) -> ToolResult:
        uris: List[str] = []
        for track in params.track_ids:
            uri = to_track_uri(track)
            if uri not in uris:
                uris.append(uri)

        snapshot_id = await spotify.remove_tracks_from_playlist(params.playlist_id, uris)
        return ToolResult(
            success=True,
            message=f"Removed {len(uris)} tracks from playlist {params.playlist_id}",
            data={
                "playlistId": params.playlist_id,
                "tracksRemoved": len(uris),
                "snapshotId": snapshot_id,
            },
        )


class ChangePlaylistDetailsTool(SpotifyTool):
    schema = ChangePlaylistDetailsParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="changePlaylistDetails",
            description=CHANGE_PLAYLIST_DETAILS_DESCRIPTION,
            spotify_factory=spotify_factory,
        )

    def get_start_message(self, params: ChangePlaylistDetailsParams) -> str:
        return "Updating playlist details..."

    async def run(
        self, context, spotify, params: ChangePlaylistDetailsParams, device=None
    ) -> ToolResult:
        await spotify.change_playlist_details(
            params.playlist_id, name=params.name, description=params.description
        )
        changed = {
            key: value
            for key, value in (("name", params.name), ("description", params.description))
            if value is not None
        }
        return ToolResult(
            success=True,
            message=f"Updated {' and '.join(changed)} of playlist {params.playlist_id}",
            data={"playlistId": params.playlist_id, **changed},
        )
