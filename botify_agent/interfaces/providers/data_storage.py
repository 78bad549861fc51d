from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple


class DataStorageProvider(ABC):
    """Interface for the document store backing the repositories."""

    @abstractmethod
    def create_collection(self, name: str) -> None:
        """Create a collection if it does not exist yet."""
        pass

    @abstractmethod
    def insert_one(self, collection: str, document: Dict) -> str:
        """Insert a document and return its id."""
        pass

    @abstractmethod
    def find_one(self, collection: str, query: Dict) -> Optional[Dict]:
        """Find a single document."""
        pass

    @abstractmethod
    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List[Tuple]] = None,
        limit: int = 0,
    ) -> List[Dict]:
        """Find documents matching query."""
        pass

    @abstractmethod
    def update_one(self, collection: str, query: Dict, update: Dict, upsert: bool = False) -> bool:
        """Apply an update document to the first match."""
        pass

    @abstractmethod
    def delete_many(self, collection: str, query: Dict) -> int:
        """Delete all matching documents and return how many went."""
        pass

    @abstractmethod
    def create_index(self, collection: str, keys: List[Tuple], **kwargs) -> None:
        """Create an index."""
        pass
