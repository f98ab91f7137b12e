"""
Base Repository - Abstract interface for data access

This defines the contract that all repository implementations must follow.
Allows swapping between local files (current) and a database (future) without
changing the service layer or the routers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from music_commerce.access.query import FilterSpec
from music_commerce.resources import OwnerPath


class RepositoryError(Exception):
    """Base exception for repository errors."""


class RecordNotFoundError(RepositoryError):
    """Raised when the record to update or delete does not exist."""


class DuplicateRecordError(RepositoryError):
    """Raised when a unique key is already taken."""

    def __init__(self, collection: str, key: tuple):
        super().__init__(f"Duplicate {collection} record for key {key}")
        self.collection = collection
        self.key = key


@dataclass
class QueryResult:
    """One page of a list query"""
    results: List[Dict[str, Any]] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total_pages: int = 0
    total_results: int = 0


class BaseRepository(ABC):
    """Abstract base class for data repositories"""

    @abstractmethod
    def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one record by id.

        Returns:
            Copy of the record, or None when absent
        """
        pass

    @abstractmethod
    def find(self, collection: str, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """
        Fetch every record whose fields equal ``filters``.

        Used for cascades and lookups, never for caller-facing listings.
        """
        pass

    @abstractmethod
    def query(
        self,
        collection: str,
        spec: FilterSpec,
        owner_path: Optional[OwnerPath] = None
    ) -> QueryResult:
        """
        Run a normalized list query.

        Args:
            collection: Collection name
            spec: Normalized filters, pagination and sort keys
            owner_path: How to apply spec.owner_id to this collection

        Returns:
            QueryResult with the requested page
        """
        pass

    @abstractmethod
    def create(self, collection: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a record, assigning id and timestamps.

        Raises:
            DuplicateRecordError: a unique key is taken
        """
        pass

    @abstractmethod
    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Apply ``changes`` to one record.

        Raises:
            RecordNotFoundError: no record with that id
            DuplicateRecordError: a unique key is taken
        """
        pass

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> Dict[str, Any]:
        """
        Remove one record and return it.

        Raises:
            RecordNotFoundError: no record with that id
        """
        pass
