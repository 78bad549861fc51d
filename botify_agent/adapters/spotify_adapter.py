"""
Spotify Web API adapter for the Botify Agent system.

This adapter implements the SpotifyProvider interface over httpx. An
instance is bound to one user's access token; it never refreshes the token
and never retries, every non-2xx response raises SpotifyAPIError.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from botify_agent.domains.errors import SpotifyAPIError
from botify_agent.domains.spotify import (
    Device,
    PlaybackState,
    Playlist,
    SpotifyUser,
    Track,
)
from botify_agent.interfaces.providers.spotify import SearchType, SpotifyProvider

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.spotify.com/v1"
PLAYLIST_PAGE_SIZE = 100


class SpotifyAdapter(SpotifyProvider):
    """httpx implementation of SpotifyProvider."""

    def __init__(
        self,
        access_token: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.access_token = access_token
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Send an API request and return the decoded body, if any.

        ``path`` is either relative to the API root or an absolute ``next``
        URL from a paging object.
        """
        url = path if path.startswith("https://") else f"{API_BASE_URL}{path}"
        logger.debug(f"Spotify {method} {url}")

        response = await self.client.request(
            method,
            url,
            params=params,
            json=json,
            headers={"Authorization": f"Bearer {self.access_token}"},
        )
        if response.status_code >= 400:
            raise SpotifyAPIError(response.status_code, _error_message(response))

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # Some player endpoints answer 200 with a non-JSON body
            return None

    async def search(
        self, query: str, types: List[SearchType], limit: int = 10
    ) -> Dict[str, Any]:
        payload = await self._request(
            "GET",
            "/search",
            params={"q": query, "type": ",".join(types), "limit": limit},
        )
        return payload or {}

    async def get_devices(self) -> List[Device]:
        payload = await self._request("GET", "/me/player/devices") or {}
        return [Device.model_validate(device) for device in payload.get("devices", [])]

    async def find_active_device(self) -> Optional[Device]:
        for device in await self.get_devices():
            if device.is_active:
                return device
        return None

    async def get_playback_state(self) -> Optional[PlaybackState]:
        payload = await self._request("GET", "/me/player")
        if not payload:
            return None
        return PlaybackState.model_validate(payload)

    async def get_current_track(self) -> Optional[PlaybackState]:
        payload = await self._request("GET", "/me/player/currently-playing")
        if not payload or not payload.get("item"):
            return None
        return PlaybackState.model_validate(payload)

    async def resume_playback(self, device: Device, uri: Optional[str] = None) -> None:
        body: Dict[str, Any] = {}
        if uri:
            if uri.startswith("spotify:track:"):
                body["uris"] = [uri]
            else:
                body["context_uri"] = uri
        await self._request(
            "PUT",
            "/me/player/play",
            params=_device_params(device),
            json=body or None,
        )

    async def pause_playback(self, device: Device) -> None:
        await self._request("PUT", "/me/player/pause", params=_device_params(device))

    async def skip_track(self, device: Device, n: int = 1) -> None:
        for _ in range(n):
            await self._request("POST", "/me/player/next", params=_device_params(device))

    async def previous_track(self, device: Device) -> None:
        await self._request("POST", "/me/player/previous", params=_device_params(device))

    async def add_to_queue(self, uri: str, device: Optional[Device] = None) -> None:
        params = {"uri": uri, **_device_params(device)}
        await self._request("POST", "/me/player/queue", params=params)

    async def get_user_profile(self) -> SpotifyUser:
        payload = await self._request("GET", "/me")
        return SpotifyUser.model_validate(payload or {})

    async def get_current_user_playlists(self, limit: int = 20) -> List[Playlist]:
        payload = await self._request("GET", "/me/playlists", params={"limit": limit}) or {}
        return [Playlist.from_api(item) for item in payload.get("items") or [] if item]

    async def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool = False,
        collaborative: bool = False,
        description: Optional[str] = None,
    ) -> Playlist:
        body: Dict[str, Any] = {
            "name": name,
            "public": public,
            "collaborative": collaborative,
        }
        if description is not None:
            body["description"] = description
        payload = await self._request(
            "POST", f"/users/{quote(user_id, safe='')}/playlists", json=body
        )
        return Playlist.from_api(payload or {})

    async def get_playlist_tracks(self, playlist_id: str) -> List[Track]:
        tracks: List[Track] = []
        next_url: Optional[str] = f"/playlists/{quote(playlist_id, safe='')}/tracks"
        params: Optional[Dict[str, Any]] = {"limit": PLAYLIST_PAGE_SIZE, "offset": 0}

        while next_url:
            payload = await self._request("GET", next_url, params=params) or {}
            for item in payload.get("items") or []:
                track = (item or {}).get("track")
                # Removed or unavailable tracks come back as null
                if track:
                    tracks.append(Track.model_validate(track))
            next_url = payload.get("next")
            # The next URL already carries offset and limit
            params = None

        logger.debug(f"Loaded {len(tracks)} tracks from playlist {playlist_id}")
        return tracks

    async def add_tracks_to_playlist(
        self, playlist_id: str, uris: List[str], position: Optional[int] = None
    ) -> Optional[str]:
        body: Dict[str, Any] = {"uris": uris}
        if position is not None:
            body["position"] = position
        payload = await self._request(
            "POST", f"/playlists/{quote(playlist_id, safe='')}/tracks", json=body
        )
        return (payload or {}).get("snapshot_id")

    async def remove_tracks_from_playlist(
        self, playlist_id: str, uris: List[str]
    ) -> Optional[str]:
        payload = await self._request(
            "DELETE",
            f"/playlists/{quote(playlist_id, safe='')}/tracks",
            json={"tracks": [{"uri": uri} for uri in uris]},
        )
        return (payload or {}).get("snapshot_id")

    async def change_playlist_details(
        self,
        playlist_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        body: Dict[str, Any] = {}
        if name is not None:
            body["name"] = name
        if description is not None:
            body["description"] = description
        await self._request("PUT", f"/playlists/{quote(playlist_id, safe='')}", json=body)


def _device_params(device: Optional[Device]) -> Dict[str, str]:
    if device is None or not device.id:
        return {}
    return {"device_id": device.id}


def _error_message(response: httpx.Response) -> str:
    """Extract the error message of a Spotify error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return error.get("message") or response.reason_phrase
    if isinstance(error, str):
        return payload.get("error_description") or error
    return response.reason_phrase
