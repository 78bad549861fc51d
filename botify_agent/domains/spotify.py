"""
Domain models for Spotify Web API resources.

Only the fields the tool layer relies on are modelled; anything else in the
API payloads is ignored.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "SpotifyModel",
    "Device",
    "SpotifyUser",
    "Artist",
    "Album",
    "Track",
    "Playlist",
    "PlaybackState",
    "SpotifyToken",
]


class SpotifyModel(BaseModel):
    """Base model that tolerates the extra fields Spotify sends."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Device(SpotifyModel):
    """A playback endpoint reported by the Spotify player API."""

    id: Optional[str] = Field(None, description="Device id, null for restricted devices")
    name: str = Field("Unknown Device", description="Human readable device name")
    is_active: bool = Field(False, description="Whether this is the active device")
    type: Optional[str] = None
    volume_percent: Optional[int] = None


class SpotifyUser(SpotifyModel):
    id: str
    display_name: Optional[str] = None
    uri: Optional[str] = None


class Artist(SpotifyModel):
    id: Optional[str] = None
    name: str
    uri: Optional[str] = None


class Album(SpotifyModel):
    id: Optional[str] = None
    name: str
    uri: Optional[str] = None


class Track(SpotifyModel):
    id: Optional[str] = None
    name: str
    uri: str
    duration_ms: Optional[int] = None
    artists: List[Artist] = Field(default_factory=list)
    album: Optional[Album] = None

    def summary(self) -> dict:
        """Compact representation handed to the agent."""
        return {
            "id": self.id,
            "name": self.name,
            "uri": self.uri,
            "artists": [artist.name for artist in self.artists],
            "album": self.album.name if self.album else None,
        }


class Playlist(SpotifyModel):
    id: str
    name: str
    uri: Optional[str] = None
    description: Optional[str] = None
    public: Optional[bool] = None
    collaborative: bool = False
    owner: Optional[SpotifyUser] = None
    tracks_total: Optional[int] = None

    @classmethod
    def from_api(cls, payload: dict) -> "Playlist":
        """Build from a Spotify playlist object, flattening ``tracks.total``."""
        tracks = payload.get("tracks") or {}
        return cls.model_validate({**payload, "tracks_total": tracks.get("total")})

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "uri": self.uri,
            "description": self.description,
            "public": self.public,
            "collaborative": self.collaborative,
            "tracksTotal": self.tracks_total,
        }


class PlaybackState(SpotifyModel):
    """Current playback as reported by GET /me/player."""

    is_playing: bool = False
    device: Optional[Device] = None
    item: Optional[Track] = None
    progress_ms: Optional[int] = None
    currently_playing_type: Optional[str] = None


class SpotifyToken(SpotifyModel):
    """Response of the Spotify accounts token endpoint."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Lifetime of the access token in seconds")
    refresh_token: Optional[str] = None
    scope: str = ""
