"""
Spotify Web API provider interface.

Implementations are bound to one user's access token and assume it is
valid; token refresh happens before a provider is built.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from botify_agent.domains.spotify import (
    Device,
    PlaybackState,
    Playlist,
    SpotifyUser,
    Track,
)

SearchType = Literal["track", "artist", "album", "playlist"]


class SpotifyProvider(ABC):
    """Interface for an authenticated Spotify client."""

    @abstractmethod
    async def search(
        self, query: str, types: List[SearchType], limit: int = 10
    ) -> Dict[str, Any]:
        """Search the catalog; returns the raw result pages keyed by type."""
        pass

    @abstractmethod
    async def get_devices(self) -> List[Device]:
        """List the user's available playback devices."""
        pass

    @abstractmethod
    async def find_active_device(self) -> Optional[Device]:
        """Return the active device, or None when nothing is active."""
        pass

    @abstractmethod
    async def get_playback_state(self) -> Optional[PlaybackState]:
        """Return the current playback state, or None without a session."""
        pass

    @abstractmethod
    async def get_current_track(self) -> Optional[PlaybackState]:
        """Return playback state when a track is playing, else None."""
        pass

    @abstractmethod
    async def resume_playback(
        self, device: Device, uri: Optional[str] = None
    ) -> None:
        """Start playing ``uri`` on ``device`` or resume the current context."""
        pass

    @abstractmethod
    async def pause_playback(self, device: Device) -> None:
        """Pause playback on ``device``."""
        pass

    @abstractmethod
    async def skip_track(self, device: Device, n: int = 1) -> None:
        """Skip forward ``n`` tracks."""
        pass

    @abstractmethod
    async def previous_track(self, device: Device) -> None:
        """Go back to the previous track."""
        pass

    @abstractmethod
    async def add_to_queue(self, uri: str, device: Optional[Device] = None) -> None:
        """Append an item to the playback queue."""
        pass

    @abstractmethod
    async def get_user_profile(self) -> SpotifyUser:
        """Return the current user's profile."""
        pass

    @abstractmethod
    async def get_current_user_playlists(self, limit: int = 20) -> List[Playlist]:
        """Return the current user's playlists."""
        pass

    @abstractmethod
    async def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool = False,
        collaborative: bool = False,
        description: Optional[str] = None,
    ) -> Playlist:
        """Create a playlist owned by ``user_id``."""
        pass

    @abstractmethod
    async def get_playlist_tracks(self, playlist_id: str) -> List[Track]:
        """Return every track of a playlist, in playlist order."""
        pass

    @abstractmethod
    async def add_tracks_to_playlist(
        self, playlist_id: str, uris: List[str], position: Optional[int] = None
    ) -> Optional[str]:
        """Insert tracks at ``position`` (append when None); returns snapshot id."""
        pass

    @abstractmethod
    async def remove_tracks_from_playlist(
        self, playlist_id: str, uris: List[str]
    ) -> Optional[str]:
        """Remove every occurrence of the given track URIs; returns snapshot id."""
        pass

    @abstractmethod
    async def change_playlist_details(
        self,
        playlist_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Rename a playlist and/or change its description."""
        pass
