from abc import ABC, abstractmethod
from typing import List, Optional

from botify_agent.domains.messages import ChatMessage


class MessageRepository(ABC):
    """Interface for the chat message log."""

    @abstractmethod
    def create(self, message: ChatMessage) -> ChatMessage:
        """Persist a chat message."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: str, message_id: str) -> Optional[ChatMessage]:
        """Get a message by user and message id."""
        pass

    @abstractmethod
    def find_by_user_id(self, user_id: str, limit: int = 0) -> List[ChatMessage]:
        """Get a user's messages, oldest first; ``limit`` keeps the newest N."""
        pass

    @abstractmethod
    def delete_by_user_id(self, user_id: str) -> int:
        """Delete a user's message log."""
        pass
