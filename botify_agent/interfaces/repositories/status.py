from abc import ABC, abstractmethod
from typing import Optional


class StatusMessageStore(ABC):
    """Tracks the live status message id of each user."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[str]:
        """Return the user's current status message id, if any."""
        pass

    @abstractmethod
    def set(self, user_id: str, message_id: str) -> None:
        """Remember the user's current status message id."""
        pass

    @abstractmethod
    def clear(self, user_id: str) -> None:
        """Forget the user's status message."""
        pass
