"""Abstract base class for alias store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import AliasRecord


class AliasStoreBase(ABC):
    """Abstract base class for alias persistence.

    Implementations own the uniqueness of short codes: ``insert`` must
    reject a duplicate code instead of overwriting the existing record.
    """

    def __init__(self, db_config: str):
        """Initialize the store.

        Args:
            db_config: Connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def find_by_code(self, short_code: str) -> Optional[AliasRecord]:
        """Get the record for a short code.

        Args:
            short_code: Lowercase short code

        Returns:
            The record if found, None otherwise

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def insert(self, record: AliasRecord) -> None:
        """Insert a new record.

        Args:
            record: Record to store

        Raises:
            DuplicateKeyError: If the short code already exists
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def update_last_accessed(self, short_code: str, at: datetime) -> None:
        """Move the last-access timestamp of a record forward to ``at``.

        The stored value never decreases; an older ``at`` is ignored.

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> List[str]:
        """Delete every record last accessed strictly before ``cutoff``.

        Returns:
            Short codes of the deleted records

        Raises:
            StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
