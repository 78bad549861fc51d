"""
Auth service implementation.

This service owns the Spotify token lifecycle: pending authorizations, the
OAuth code exchange, expiry checks and refreshes, and building Spotify
clients bound to a user's access token.
"""
import logging
import time
import uuid
from typing import Callable, Optional, Tuple

from botify_agent.domains.auth import AuthRecord, AuthUpdate
from botify_agent.domains.errors import AuthenticationError, NotFoundError
from botify_agent.domains.spotify import SpotifyToken
from botify_agent.interfaces.providers.spotify import SpotifyProvider
from botify_agent.interfaces.providers.spotify_auth import SpotifyAuthProvider
from botify_agent.interfaces.repositories.auth import AuthRepository
from botify_agent.interfaces.services.auth import AuthService as AuthServiceInterface

logger = logging.getLogger(__name__)

__all__ = ["AuthService"]


class AuthService(AuthServiceInterface):
    """Service for Spotify authorization and token refresh."""

    def __init__(
        self,
        auth_repository: AuthRepository,
        auth_provider: SpotifyAuthProvider,
        spotify_client_factory: Callable[[str], SpotifyProvider],
        expiry_margin_seconds: int = 0,
    ):
        """Initialize the auth service.

        Args:
            auth_repository: Store of AuthRecords
            auth_provider: Spotify accounts service
            spotify_client_factory: Builds a Spotify client from an access token
            expiry_margin_seconds: Refresh tokens this many seconds before they expire
        """
        self.auth_repository = auth_repository
        self.auth_provider = auth_provider
        self.spotify_client_factory = spotify_client_factory
        self.expiry_margin_seconds = expiry_margin_seconds

    def create_authorization(self, user_id: str) -> Tuple[str, str]:
        auth_id = uuid.uuid4().hex
        self.auth_repository.create(AuthRecord(auth_id=auth_id, user_id=user_id))
        logger.info(f"Created pending authorization for user {user_id}")
        return self.auth_provider.create_authorize_url(auth_id), auth_id

    async def complete_authorization(self, auth_id: str, code: str) -> AuthRecord:
        """Exchange the OAuth code and store the tokens.

        Raises:
            NotFoundError: If ``auth_id`` is not a known authorization
        """
        record = self.auth_repository.find_by_auth_id(auth_id)
        if record is None:
            raise NotFoundError(f"Unknown authorization {auth_id}")

        token = await self.auth_provider.exchange_code(code)
        updated = self._store_token(record.user_id, token)
        logger.info(f"Spotify connected for user {record.user_id}")
        return updated

    def find_token(self, user_id: str) -> Optional[AuthRecord]:
        return self.auth_repository.find_by_user_id(user_id)

    async def refresh(self, user_id: str) -> AuthRecord:
        """Refresh the user's access token.

        Raises:
            AuthenticationError: If the user has no refresh token
        """
        record = self.auth_repository.find_by_user_id(user_id)
        if record is None or not record.refresh_token:
            raise AuthenticationError(f"No Spotify authorization for user {user_id}")

        token = await self.auth_provider.refresh_token(record.refresh_token)
        updated = self._store_token(user_id, token)
        logger.info(f"Refreshed Spotify token for user {user_id}")
        return updated

    async def ensure_valid_token(self, user_id: str, now: Optional[float] = None) -> bool:
        record = self.auth_repository.find_by_user_id(user_id)
        if record is None or record.is_pending:
            return False

        if now is None:
            now = time.time()
        if not record.is_expired(now, self.expiry_margin_seconds):
            return True

        try:
            await self.refresh(user_id)
            return True
        except Exception as e:
            logger.exception(f"Failed to refresh Spotify token for user {user_id}: {e}")
            return False

    async def build_spotify_client(self, user_id: str) -> SpotifyProvider:
        """Build a Spotify client bound to the user's access token.

        Raises:
            AuthenticationError: If the user has not connected Spotify
        """
        record = self.auth_repository.find_by_user_id(user_id)
        if record is None or record.is_pending:
            raise AuthenticationError(f"Spotify account of user {user_id} is not connected")
        return self.spotify_client_factory(record.access_token)

    def _store_token(self, user_id: str, token: SpotifyToken) -> AuthRecord:
        updated = self.auth_repository.update(
            user_id,
            AuthUpdate(
                access_token=token.access_token,
                refresh_token=token.refresh_token,
                expires_in=int(time.time()) + token.expires_in,
                scope=token.scope,
                token_type=token.token_type,
            ),
        )
        if updated is None:
            raise NotFoundError(f"No authorization stored for user {user_id}")
        return updated
