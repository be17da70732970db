"""Retention cleanup of unused short codes."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .database.base import AliasStoreBase
from .database.cache import RedisCache


RETENTION_DAYS = 365


class RetentionSweeper:
    """Delete records that have not been accessed within the retention horizon."""

    def __init__(
        self,
        store: AliasStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
        retention_days: int = RETENTION_DAYS,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.retention = timedelta(days=retention_days)

    async def sweep(self, now: Optional[datetime] = None) -> int:
        """Delete every record last accessed before ``now - retention``.

        Deletion is idempotent, so a failed run can simply be repeated.

        Args:
            now: Reference time (defaults to current UTC time)

        Returns:
            Number of deleted records

        Raises:
            StoreError: The store delete failed
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - self.retention

        self.logger.info(f"Running retention sweep (cutoff {cutoff.isoformat()})")
        deleted = await self.store.delete_older_than(cutoff)

        if self.cache and deleted:
            await self.cache.evict(deleted)

        self.logger.info(f"Retention sweep removed {len(deleted)} inactive short URLs")
        return len(deleted)


class SweepScheduler:
    """Run a RetentionSweeper once a day at a fixed UTC time.

    The job lives on an APScheduler ``AsyncIOScheduler`` so it shares the
    event loop (and the store's connection pool) with request handling.
    """

    JOB_ID = "retention-sweep"

    def __init__(
        self,
        sweeper: RetentionSweeper,
        hour: int = 0,
        minute: int = 0,
        logger: Optional[logging.Logger] = None,
    ):
        self.sweeper = sweeper
        self.hour = hour
        self.minute = minute
        self.logger = logger or logging.getLogger(__name__)

        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self.scheduler.add_job(
            self.run_once,
            trigger=CronTrigger(hour=hour, minute=minute, timezone="UTC"),
            id=self.JOB_ID,
            name="Retention sweep",
            max_instances=1,
            coalesce=True,
            misfire_grace_time=3600,
        )

    @property
    def running(self) -> bool:
        return self.scheduler.running

    @property
    def job(self) -> Optional[Job]:
        return self.scheduler.get_job(self.JOB_ID)

    def start(self) -> None:
        """Start the scheduler on the running event loop."""
        if self.running:
            return
        self.scheduler.start()
        self.logger.info(
            f"Retention sweep scheduled daily at {self.hour:02d}:{self.minute:02d} UTC"
        )

    async def stop(self) -> None:
        """Shut the scheduler down without waiting for a sweep in progress."""
        if not self.running:
            return
        self.scheduler.shutdown(wait=False)

    async def run_once(self) -> Optional[int]:
        """Run one sweep; failures are logged and the run abandoned.

        Returns:
            Deleted count, or None if the run failed
        """
        try:
            return await self.sweeper.sweep()
        except Exception as e:
            self.logger.error(f"Retention sweep failed, will retry on next run: {e}")
            return None
