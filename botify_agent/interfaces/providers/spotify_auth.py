from abc import ABC, abstractmethod

from botify_agent.domains.spotify import SpotifyToken


class SpotifyAuthProvider(ABC):
    """Interface for the Spotify OAuth authorization-code flow."""

    @abstractmethod
    def create_authorize_url(self, state: str) -> str:
        """Build the URL the user opens to grant access."""
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> SpotifyToken:
        """Exchange an authorization code for tokens."""
        pass

    @abstractmethod
    async def refresh_token(self, refresh_token: str) -> SpotifyToken:
        """Obtain a new access token from a refresh token."""
        pass
