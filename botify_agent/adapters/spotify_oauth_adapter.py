"""
Spotify accounts service adapter.

Implements the authorization-code flow: the authorize URL the user opens,
the code exchange and the refresh grant.
"""
import logging
from typing import Dict, List, Optional
from urllib.parse import urlencode

import httpx

from botify_agent.domains.errors import SpotifyAPIError
from botify_agent.domains.spotify import SpotifyToken
from botify_agent.interfaces.providers.spotify_auth import SpotifyAuthProvider

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

SCOPES = [
    "user-read-currently-playing",
    "user-read-playback-state",
    "user-modify-playback-state",
    "app-remote-control",
    "streaming",
    "playlist-read-private",
    "playlist-read-collaborative",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-read-playback-position",
    "user-top-read",
    "user-read-recently-played",
    "user-library-modify",
    "user-library-read",
]


class SpotifyOAuthAdapter(SpotifyAuthProvider):
    """httpx implementation of SpotifyAuthProvider."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        client: Optional[httpx.AsyncClient] = None,
        scopes: Optional[List[str]] = None,
        timeout: float = 30.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes or SCOPES
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def create_authorize_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": self.redirect_uri,
            "show_dialog": "false",
            "state": state,
            "scope": " ".join(self.scopes),
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> SpotifyToken:
        return await self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
            }
        )

    async def refresh_token(self, refresh_token: str) -> SpotifyToken:
        token = await self._token_request(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )
        # Spotify may omit the refresh token, the old one stays valid then
        if not token.refresh_token:
            token.refresh_token = refresh_token
        return token

    async def _token_request(self, data: Dict[str, str]) -> SpotifyToken:
        response = await self.client.post(
            TOKEN_URL,
            data=data,
            auth=(self.client_id, self.client_secret),
        )
        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            message = (
                payload.get("error_description")
                or payload.get("error")
                or response.reason_phrase
            )
            logger.error(
                f"Spotify token request ({data['grant_type']}) failed: "
                f"{response.status_code} {message}"
            )
            raise SpotifyAPIError(response.status_code, message)

        logger.info(f"Spotify token request ({data['grant_type']}) succeeded")
        return SpotifyToken.model_validate(response.json())
