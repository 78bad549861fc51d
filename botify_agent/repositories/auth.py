"""
MongoDB implementation of the auth repository.
"""
import logging
from typing import Optional

from botify_agent.domains.auth import AuthRecord, AuthUpdate
from botify_agent.interfaces.providers.data_storage import DataStorageProvider
from botify_agent.interfaces.repositories.auth import AuthRepository

logger = logging.getLogger(__name__)

__all__ = ["MongoAuthRepository"]


class MongoAuthRepository(AuthRepository):
    """MongoDB implementation of the AuthRepository interface.

    Holds at most one record per user: creating a record replaces any
    earlier (pending or authorized) record of the same user.
    """

    def __init__(self, db_adapter: DataStorageProvider):
        """Initialize the repository with a database adapter."""
        self.db = db_adapter
        self.collection = "auth"

        self.db.create_collection(self.collection)
        self.db.create_index(self.collection, [("auth_id", 1)], unique=True)
        self.db.create_index(self.collection, [("user_id", 1)])

    def create(self, record: AuthRecord) -> AuthRecord:
        removed = self.db.delete_many(self.collection, {"user_id": record.user_id})
        if removed:
            logger.info(f"Replaced {removed} earlier authorization(s) of user {record.user_id}")

        self.db.insert_one(self.collection, record.model_dump())
        return record

    def find_by_user_id(self, user_id: str) -> Optional[AuthRecord]:
        doc = self.db.find_one(self.collection, {"user_id": user_id})
        if not doc:
            return None
        return AuthRecord.model_validate(doc)

    def find_by_auth_id(self, auth_id: str) -> Optional[AuthRecord]:
        doc = self.db.find_one(self.collection, {"auth_id": auth_id})
        if not doc:
            return None
        return AuthRecord.model_validate(doc)

    def update(self, user_id: str, updates: AuthUpdate) -> Optional[AuthRecord]:
        changes = updates.model_dump(exclude_none=True)
        if changes:
            self.db.update_one(self.collection, {"user_id": user_id}, {"$set": changes})
        return self.find_by_user_id(user_id)

    def delete_by_user_id(self, user_id: str) -> bool:
        return self.db.delete_many(self.collection, {"user_id": user_id}) > 0
