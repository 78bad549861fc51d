from abc import ABC, abstractmethod
from typing import Optional, Tuple

from botify_agent.domains.auth import AuthRecord
from botify_agent.interfaces.providers.spotify import SpotifyProvider


class AuthService(ABC):
    """Interface for Spotify authorization and token lifecycle."""

    @abstractmethod
    def create_authorization(self, user_id: str) -> Tuple[str, str]:
        """Create a pending authorization; returns (authorize_url, auth_id)."""
        pass

    @abstractmethod
    async def complete_authorization(self, auth_id: str, code: str) -> AuthRecord:
        """Exchange the OAuth code and store the tokens."""
        pass

    @abstractmethod
    def find_token(self, user_id: str) -> Optional[AuthRecord]:
        """Get the stored authorization of a user."""
        pass

    @abstractmethod
    async def refresh(self, user_id: str) -> AuthRecord:
        """Refresh the user's access token."""
        pass

    @abstractmethod
    async def ensure_valid_token(self, user_id: str, now: Optional[float] = None) -> bool:
        """Refresh the token when expired; returns False if that failed."""
        pass

    @abstractmethod
    async def build_spotify_client(self, user_id: str) -> SpotifyProvider:
        """Build a Spotify client bound to the user's access token."""
        pass
