"""Short code lookup for redirects."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, Set

from .codec import is_valid_lookup_code
from .database.base import AliasStoreBase
from .database.cache import RedisCache
from .errors import AliasNotFound, InvalidShortCode


class RedirectResolver:
    """Resolve short codes to their original URL.

    Each hit schedules a last-access update as a detached task. The
    redirect never waits for it and its failures only reach the log.
    """

    def __init__(
        self,
        store: AliasStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self._pending: Set[asyncio.Task] = set()

    async def resolve(self, code: str, track_access: bool = True) -> str:
        """Get the original URL for a short code.

        Args:
            code: Requested code, any case
            track_access: Whether to record the access time

        Returns:
            Original URL

        Raises:
            InvalidShortCode: Code contains characters outside [a-z0-9._-]
            AliasNotFound: No record for the code
            StoreError: The store lookup failed
        """
        if not is_valid_lookup_code(code):
            raise InvalidShortCode()

        short_code = code.lower()
        original_url = await self._lookup(short_code)

        if original_url is None:
            self.logger.info(f"Short code not found: {short_code}")
            raise AliasNotFound()

        if track_access:
            self._touch_in_background(short_code)

        return original_url

    async def _lookup(self, short_code: str) -> Optional[str]:
        """Cache first, then the store.

        A cache hit is trusted without consulting the store. The retention
        sweep evicts what it deletes; a row removed outside the app stays
        resolvable until its cache entry expires (CACHE_TTL_SECONDS).
        """
        if self.cache:
            cached_url = await self.cache.get_url(short_code)
            if cached_url:
                self.logger.debug(f"Cache hit for {short_code}")
                return cached_url

        record = await self.store.find_by_code(short_code)
        if record is None:
            return None

        if self.cache:
            await self.cache.set_url(short_code, record.original_url)

        self.logger.debug(f"Retrieved URL: {short_code} -> {record.original_url}")
        return record.original_url

    def _touch_in_background(self, short_code: str) -> None:
        now = datetime.now(timezone.utc)
        task = asyncio.create_task(self._touch(short_code, now))
        # Hold a reference until done so the task isn't garbage collected
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _touch(self, short_code: str, at: datetime) -> None:
        try:
            await self.store.update_last_accessed(short_code, at)
        except Exception as e:
            self.logger.error(f"Error updating last access for {short_code}: {e}")

    @property
    def pending_updates(self) -> int:
        return len(self._pending)

    async def wait_for_pending(self) -> None:
        """Wait for in-flight last-access updates (used on shutdown)."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
