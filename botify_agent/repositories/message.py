"""
MongoDB implementation of the message repository.
"""
from typing import List, Optional

from botify_agent.domains.messages import ChatMessage
from botify_agent.interfaces.providers.data_storage import DataStorageProvider
from botify_agent.interfaces.repositories.message import MessageRepository

__all__ = ["MongoMessageRepository"]


class MongoMessageRepository(MessageRepository):
    """MongoDB implementation of the MessageRepository interface."""

    def __init__(self, db_adapter: DataStorageProvider):
        """Initialize the repository with a database adapter."""
        self.db = db_adapter
        self.collection = "messages"

        self.db.create_collection(self.collection)
        self.db.create_index(self.collection, [("user_id", 1), ("message_id", 1)])
        self.db.create_index(self.collection, [("user_id", 1), ("created_at", -1)])

    def create(self, message: ChatMessage) -> ChatMessage:
        doc = message.model_dump()
        doc["role"] = message.role.value
        self.db.insert_one(self.collection, doc)
        return message

    def find_by_id(self, user_id: str, message_id: str) -> Optional[ChatMessage]:
        doc = self.db.find_one(
            self.collection, {"user_id": user_id, "message_id": message_id}
        )
        if not doc:
            return None
        return ChatMessage.model_validate(doc)

    def find_by_user_id(self, user_id: str, limit: int = 0) -> List[ChatMessage]:
        """Get a user's messages, oldest first.

        Args:
            user_id: Chat user id
            limit: Keep only the newest ``limit`` messages; 0 keeps all

        Returns:
            Messages in chronological order
        """
        if limit > 0:
            docs = self.db.find(
                self.collection,
                {"user_id": user_id},
                sort=[("created_at", -1)],
                limit=limit,
            )
            docs.reverse()
        else:
            docs = self.db.find(
                self.collection, {"user_id": user_id}, sort=[("created_at", 1)]
            )
        return [ChatMessage.model_validate(doc) for doc in docs]

    def delete_by_user_id(self, user_id: str) -> int:
        return self.db.delete_many(self.collection, {"user_id": user_id})
