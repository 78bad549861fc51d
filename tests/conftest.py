"""
Shared test doubles.

FakeSpotifyProvider keeps playback and playlists in memory so tool tests can
check behaviour (idempotence, round trips) rather than call sequences.
"""
from typing import Any, Dict, List, Optional

import pytest

from botify_agent.domains.errors import ExternalServiceError
from botify_agent.domains.spotify import (
    Device,
    PlaybackState,
    Playlist,
    SpotifyUser,
    Track,
)
from botify_agent.interfaces.providers.messenger import ChatProvider, StatusMessenger
from botify_agent.interfaces.providers.spotify import SpotifyProvider


def make_track(n: int) -> Dict[str, Any]:
    return {
        "id": f"t{n}",
        "name": f"Song {n}",
        "uri": f"spotify:track:t{n}",
        "duration_ms": 200000,
        "artists": [{"id": "a1", "name": "Daft Punk", "uri": "spotify:artist:a1"}],
        "album": {"id": "al1", "name": "Discovery"},
    }


class FakeSpotifyProvider(SpotifyProvider):
    """In-memory Spotify account."""

    __test__ = False

    def __init__(self, active_device: bool = True, is_playing: bool = False):
        self.devices = [
            Device(id="dev1", name="Kitchen", is_active=active_device, type="Speaker")
        ]
        self.is_playing = is_playing
        self.current_uri: Optional[str] = None
        self.queue: List[str] = []
        self.user = SpotifyUser(id="user1", display_name="Test User")
        self.playlists: Dict[str, Dict[str, Any]] = {}
        self.catalog = [make_track(n) for n in range(1, 21)]
        self.calls: List[str] = []

    async def search(self, query, types, limit=10):
        self.calls.append("search")
        results = {}
        if "track" in types:
            results["tracks"] = {"items": self.catalog[:limit], "total": len(self.catalog)}
        if "artist" in types:
            results["artists"] = {
                "items": [{"id": "a1", "name": "Daft Punk", "uri": "spotify:artist:a1", "genres": ["french house"]}]
            }
        return results

    async def get_devices(self):
        self.calls.append("get_devices")
        return list(self.devices)

    async def find_active_device(self):
        self.calls.append("find_active_device")
        return next((d for d in self.devices if d.is_active), None)

    async def get_playback_state(self):
        self.calls.append("get_playback_state")
        if self.current_uri is None and not self.is_playing:
            return None
        return PlaybackState(is_playing=self.is_playing, device=self.devices[0])

    async def get_current_track(self):
        self.calls.append("get_current_track")
        if self.current_uri is None:
            return None
        track = next(t for t in self.catalog if t["uri"] == self.current_uri)
        return PlaybackState(
            is_playing=self.is_playing,
            device=self.devices[0],
            item=Track.model_validate(track),
            progress_ms=1000,
        )

    async def resume_playback(self, device, uri=None):
        self.calls.append("resume_playback")
        if uri:
            self.current_uri = uri
        self.is_playing = True

    async def pause_playback(self, device):
        self.calls.append("pause_playback")
        self.is_playing = False

    async def skip_track(self, device, n=1):
        self.calls.append("skip_track")

    async def previous_track(self, device):
        self.calls.append("previous_track")

    async def add_to_queue(self, uri, device=None):
        self.calls.append("add_to_queue")
        self.queue.append(uri)

    async def get_user_profile(self):
        self.calls.append("get_user_profile")
        return self.user

    async def get_current_user_playlists(self, limit=20):
        self.calls.append("get_current_user_playlists")
        return [self._playlist(pid) for pid in list(self.playlists)[:limit]]

    async def create_playlist(self, user_id, name, public=False, collaborative=False, description=None):
        self.calls.append("create_playlist")
        playlist_id = f"pl{len(self.playlists) + 1}"
        self.playlists[playlist_id] = {
            "name": name,
            "public": public,
            "collaborative": collaborative,
            "description": description,
            "owner": user_id,
            "uris": [],
        }
        return self._playlist(playlist_id)

    async def get_playlist_tracks(self, playlist_id):
        self.calls.append("get_playlist_tracks")
        uris = self.playlists[playlist_id]["uris"]
        return [
            Track(id=uri.rsplit(":", 1)[-1], name=uri, uri=uri) for uri in uris
        ]

    async def add_tracks_to_playlist(self, playlist_id, uris, position=None):
        self.calls.append("add_tracks_to_playlist")
        current = self.playlists[playlist_id]["uris"]
        if position is None:
            current.extend(uris)
        else:
            current[position:position] = uris
        return "snapshot"

    async def remove_tracks_from_playlist(self, playlist_id, uris):
        self.calls.append("remove_tracks_from_playlist")
        playlist = self.playlists[playlist_id]
        playlist["uris"] = [uri for uri in playlist["uris"] if uri not in uris]
        return "snapshot"

    async def change_playlist_details(self, playlist_id, name=None, description=None):
        self.calls.append("change_playlist_details")
        if name is not None:
            self.playlists[playlist_id]["name"] = name
        if description is not None:
            self.playlists[playlist_id]["description"] = description

    def _playlist(self, playlist_id: str) -> Playlist:
        data = self.playlists[playlist_id]
        return Playlist(
            id=playlist_id,
            name=data["name"],
            uri=f"spotify:playlist:{playlist_id}",
            description=data["description"],
            public=data["public"],
            collaborative=data["collaborative"],
            tracks_total=len(data["uris"]),
        )


class FakeChatProvider(ChatProvider):
    """Records sent and edited messages; message ids count up from 100."""

    __test__ = False

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []
        self.edited: List[Dict[str, Any]] = []
        self._next_id = 100
        # Telegram refuses entities it cannot parse
        self.reject_markdown = False
        self.offline = False
        self.rejected_texts = set()

    async def send_message(self, chat_id, text, reply_markup=None, parse_mode="Markdown"):
        if self.offline:
            raise ExternalServiceError("Telegram sendMessage failed: connection refused")
        if self.reject_markdown and parse_mode:
            raise ExternalServiceError("Telegram sendMessage failed: can't parse entities")
        if text in self.rejected_texts:
            raise ExternalServiceError("Telegram sendMessage failed: message is too long")
        self._next_id += 1
        message = {
            "message_id": self._next_id,
            "chat_id": chat_id,
            "text": text,
            "reply_markup": reply_markup,
            "parse_mode": parse_mode,
        }
        self.sent.append(message)
        return {"message_id": self._next_id, "text": text}

    async def edit_message(self, chat_id, message_id, text, reply_markup=None):
        self.edited.append({"chat_id": chat_id, "message_id": message_id, "text": text})
        return {"message_id": int(message_id), "text": text}


class RecordingMessenger(StatusMessenger):
    """StatusMessenger that records every call as (method, text)."""

    __test__ = False

    def __init__(self, fail_on_finalize: bool = False):
        self.events: List[tuple] = []
        self.fail_on_finalize = fail_on_finalize

    async def create_status_message(self, user_id, chat_id, text):
        self.events.append(("create", text))
        return "1"

    async def update_status_message(self, user_id, chat_id, text):
        self.events.append(("update", text))

    async def finalize_status_message(self, user_id, chat_id, text):
        self.events.append(("finalize", text))
        if self.fail_on_finalize:
            raise RuntimeError("telegram is down")


@pytest.fixture
def make_spotify():
    """Factory for accounts in a non-default state."""
    return FakeSpotifyProvider


@pytest.fixture
def spotify():
    return FakeSpotifyProvider()


@pytest.fixture
def spotify_factory(spotify):
    async def factory(user_id: str) -> SpotifyProvider:
        return spotify

    return factory


@pytest.fixture
def chat_provider():
    return FakeChatProvider()


@pytest.fixture
def messenger():
    return RecordingMessenger()


@pytest.fixture
def failing_messenger():
    return RecordingMessenger(fail_on_finalize=True)
