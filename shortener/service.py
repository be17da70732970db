"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any
from datetime import datetime, timezone

from .common.url_builder import build_short_url
from .common.validators import is_valid_url
from .database.base import AliasStoreBase
from .database.cache import RedisCache
from .database.models import AliasRecord
from .errors import AliasTaken, DuplicateKeyError, ExhaustedRetries, InvalidURL
from .redirect import RedirectResolver
from .reservation import CustomAlias, RandomAlias, UniquenessResolver


MAX_INSERT_ATTEMPTS = 3


class URLShortenerService:
    """Service layer tying reservation, storage and redirects together."""

    def __init__(
        self,
        store: AliasStoreBase,
        domain: str,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
        max_insert_attempts: int = MAX_INSERT_ATTEMPTS,
    ):
        """Initialize URL shortener service.

        Args:
            store: Alias store
            domain: Base prepended to short codes when building short URLs
            cache: Optional cache instance
            logger: Optional logger
            max_insert_attempts: Reservation rounds for random codes when
                the insert itself reports a duplicate
        """
        self.store = store
        self.domain = domain
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.max_insert_attempts = max_insert_attempts
        self.reservations = UniquenessResolver(store, logger=self.logger)
        self.redirects = RedirectResolver(store, cache=cache, logger=self.logger)

    async def create_short_url(
        self,
        original_url: Optional[str],
        custom_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new short URL.

        Args:
            original_url: The original long URL
            custom_name: Optional custom alias; None or "" means generate one

        Returns:
            Dictionary with short_code, short_url, original_url, created_at

        Raises:
            ValidationError: Invalid URL or custom name
            AliasTaken: Custom name already exists
            ExhaustedRetries: No free random code was found
            StoreError: The store failed
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidURL(error)

        if custom_name is not None and custom_name != "":
            record = await self._insert_custom(original_url, custom_name)
        else:
            record = await self._insert_random(original_url)

        if self.cache:
            await self.cache.set_url(record.short_code, original_url)

        self.logger.info(f"Created short URL: {record.short_code} -> {original_url}")

        return {
            "short_code": record.short_code,
            "short_url": build_short_url(record.short_code, self.domain),
            "original_url": original_url,
            "created_at": record.created_at,
        }

    async def _insert_custom(self, original_url: str, custom_name: str) -> AliasRecord:
        short_code = await self.reservations.reserve(CustomAlias(custom_name))
        record = self._new_record(short_code, original_url)

        try:
            await self.store.insert(record)
        except DuplicateKeyError:
            # Lost a race with a concurrent request for the same name
            self.logger.info(f"Custom short code taken during insert: {short_code}")
            raise AliasTaken()

        return record

    async def _insert_random(self, original_url: str) -> AliasRecord:
        for attempt in range(1, self.max_insert_attempts + 1):
            short_code = await self.reservations.reserve(RandomAlias())
            record = self._new_record(short_code, original_url)

            try:
                await self.store.insert(record)
                return record
            except DuplicateKeyError:
                self.logger.warning(
                    f"Random short code {short_code} taken during insert (attempt {attempt})"
                )

        raise ExhaustedRetries()

    @staticmethod
    def _new_record(short_code: str, original_url: str) -> AliasRecord:
        now = datetime.now(timezone.utc)
        return AliasRecord(
            short_code=short_code,
            original_url=original_url,
            created_at=now,
            last_accessed_at=now,
        )

    async def resolve(self, code: str, track_access: bool = True) -> str:
        """Get the original URL for a short code.

        See RedirectResolver.resolve.
        """
        return await self.redirects.resolve(code, track_access=track_access)

    async def get_record(self, code: str) -> Optional[AliasRecord]:
        """Get the stored record for a short code without touching it."""
        return await self.store.find_by_code(code.lower())

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Drain pending updates and close connections."""
        await self.redirects.wait_for_pending()
        await self.store.close()
        if self.cache:
            await self.cache.close()
