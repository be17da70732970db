"""In-process alias store."""

import copy
import logging
from typing import Dict, List, Optional
from datetime import datetime

from .base import AliasStoreBase
from .models import AliasRecord
from ..errors import DuplicateKeyError


class InMemoryAliasStore(AliasStoreBase):
    """Dictionary backed store with the same contract as the SQL store.

    Used by the test suite and for running the CLI without a database.
    Records are copied in and out so callers can't mutate stored state.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__("memory://")
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[str, AliasRecord] = {}

    async def find_by_code(self, short_code: str) -> Optional[AliasRecord]:
        record = self._records.get(short_code.lower())
        return copy.copy(record) if record else None

    async def insert(self, record: AliasRecord) -> None:
        if record.short_code in self._records:
            raise DuplicateKeyError(f"Short code already exists: {record.short_code}")
        self._records[record.short_code] = copy.copy(record)

    async def update_last_accessed(self, short_code: str, at: datetime) -> None:
        record = self._records.get(short_code.lower())
        if record is None:
            self.logger.debug(f"Ignoring last-access update for missing code {short_code}")
            return
        record.last_accessed_at = max(record.last_accessed_at, at)

    async def delete_older_than(self, cutoff: datetime) -> List[str]:
        stale = [
            code for code, record in self._records.items()
            if record.last_accessed_at < cutoff
        ]
        for code in stale:
            del self._records[code]
        return stale

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._records)
