from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union


class AgentService(ABC):
    """Interface for the Spotify agent executor."""

    @abstractmethod
    async def run(
        self,
        user_id: str,
        user_input: str,
        history: Optional[List[Dict[str, Any]]] = None,
        chat_id: Optional[Union[int, str]] = None,
    ) -> str:
        """Run one agent turn and return the assistant's reply."""
        pass

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Get the fixed system instruction of the agent."""
        pass
