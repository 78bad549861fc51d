from abc import ABC, abstractmethod
from typing import Optional

from botify_agent.domains.auth import AuthRecord, AuthUpdate


class AuthRepository(ABC):
    """Interface for persisted Spotify authorizations."""

    @abstractmethod
    def create(self, record: AuthRecord) -> AuthRecord:
        """Store a new authorization record."""
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: str) -> Optional[AuthRecord]:
        """Get the authorization of a user."""
        pass

    @abstractmethod
    def find_by_auth_id(self, auth_id: str) -> Optional[AuthRecord]:
        """Get a (possibly pending) authorization by its one-time id."""
        pass

    @abstractmethod
    def update(self, user_id: str, updates: AuthUpdate) -> Optional[AuthRecord]:
        """Apply token changes and return the updated record."""
        pass

    @abstractmethod
    def delete_by_user_id(self, user_id: str) -> bool:
        """Forget every authorization of a user."""
        pass
