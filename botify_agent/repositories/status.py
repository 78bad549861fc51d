"""
In-memory store of live status messages.
"""
from typing import Dict, Optional

from botify_agent.interfaces.repositories.status import StatusMessageStore

__all__ = ["InMemoryStatusMessageStore"]


class InMemoryStatusMessageStore(StatusMessageStore):
    """Process-local ``user_id -> message_id`` map.

    Keys are disjoint between users, so interleaved turns of different users
    never touch each other's entries.
    """

    def __init__(self):
        self._messages: Dict[str, str] = {}

    def get(self, user_id: str) -> Optional[str]:
        return self._messages.get(user_id)

    def set(self, user_id: str, message_id: str) -> None:
        self._messages[user_id] = message_id

    def clear(self, user_id: str) -> None:
        self._messages.pop(user_id, None)
