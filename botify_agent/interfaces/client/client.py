from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from botify_agent.domains.auth import AuthRecord


class BotifyAgent(ABC):
    """Interface for the Botify Agent client."""

    @abstractmethod
    async def handle_update(self, update: Dict[str, Any]) -> Optional[str]:
        """Handle a Telegram webhook update; returns the reply sent, if any."""
        pass

    @abstractmethod
    async def process(
        self,
        user_id: str,
        message: str,
        history: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        """Run the agent for a user outside of Telegram."""
        pass

    @abstractmethod
    def create_authorization(self, user_id: str) -> Tuple[str, str]:
        """Start the Spotify connect flow; returns (authorize_url, auth_id)."""
        pass

    @abstractmethod
    async def complete_authorization(self, auth_id: str, code: str) -> AuthRecord:
        """Finish the Spotify connect flow from the OAuth callback."""
        pass

    @abstractmethod
    async def delete_user_history(self, user_id: str) -> None:
        """Delete the conversation history of a user."""
        pass
