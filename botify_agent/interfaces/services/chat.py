from abc import ABC, abstractmethod
from typing import Optional

from botify_agent.domains.messages import IncomingMessage


class ChatService(ABC):
    """Interface for handling inbound chat messages."""

    @abstractmethod
    async def handle_message(self, message: IncomingMessage) -> Optional[str]:
        """Process a message and return the reply sent, if any."""
        pass

    @abstractmethod
    async def delete_user_history(self, user_id: str) -> None:
        """Delete the stored conversation of a user."""
        pass
