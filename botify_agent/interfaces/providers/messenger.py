"""
Chat surface interfaces.

ChatProvider is the raw bot API; StatusMessenger is the progress side
channel tools use to show live status while they work.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

ChatId = Union[int, str]


class ChatProvider(ABC):
    """Interface for chat bot APIs."""

    @abstractmethod
    async def send_message(
        self,
        chat_id: ChatId,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
        parse_mode: Optional[str] = "Markdown",
    ) -> Dict[str, Any]:
        """Send a message and return the sent message payload.

        A parse_mode of None sends the text verbatim.
        """
        pass

    @abstractmethod
    async def edit_message(
        self,
        chat_id: ChatId,
        message_id: str,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Replace the text of a previously sent message."""
        pass


class StatusMessenger(ABC):
    """Interface for the per-user status message side channel."""

    @abstractmethod
    async def create_status_message(
        self, user_id: str, chat_id: ChatId, text: str
    ) -> str:
        """Post (or reuse) the user's status message and return its id."""
        pass

    @abstractmethod
    async def update_status_message(
        self, user_id: str, chat_id: ChatId, text: str
    ) -> None:
        """Edit the user's current status message."""
        pass

    @abstractmethod
    async def finalize_status_message(
        self, user_id: str, chat_id: ChatId, text: str
    ) -> None:
        """Write the final summary and forget the status message."""
        pass
