#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are served concurrently on one event loop (FastAPI +
asyncpg pool + redis.asyncio). The daily retention sweep runs as a separate
task on the same loop.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (required)
    DATABASE_CREATE_TABLES - Create the urls table on startup
    REDIS_URL - Redis connection URL (optional)
    DOMAIN - Base URL prefixed to short codes
    PORT - Port to listen on
    RETENTION_DAYS - Days of inactivity before a short URL is deleted
    SWEEP_ENABLED / SWEEP_HOUR / SWEEP_MINUTE - Daily retention sweep schedule (UTC)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.common.logging_config import setup_logging
from shortener.database.cache import RedisCache
from shortener.database.postgres import PostgresAliasStore
from shortener.errors import ConfigError
from shortener.service import URLShortenerService
from shortener.sweeper import RetentionSweeper, SweepScheduler
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config: Config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    store = PostgresAliasStore(
        db_config=config.database_url,
        pool_max_size=config.database_pool_max_size,
        logger=logger,
    )
    if config.database_create_tables:
        await store.ensure_tables()

    # Initialize cache (optional)
    if config.redis_url:
        logger.info("Connecting to Redis")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")
        cache = None

    service = URLShortenerService(
        store=store,
        domain=config.domain,
        cache=cache,
        logger=logger,
    )

    scheduler = None
    if config.sweep_enabled:
        sweeper = RetentionSweeper(
            store=store,
            cache=cache,
            logger=logger,
            retention_days=config.retention_days,
        )
        scheduler = SweepScheduler(
            sweeper,
            hour=config.sweep_hour,
            minute=config.sweep_minute,
            logger=logger,
        )
        scheduler.start()
    else:
        logger.info("Retention sweep disabled in this process")

    app.state.store = store
    app.state.cache = cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")

    if scheduler:
        await scheduler.stop()
    await service.close()

    logger.info("Service stopped")


def main():
    """Main entry point."""
    try:
        config = load_config()
    except ConfigError as e:
        # Logging isn't configured yet; fall back to a default logger
        setup_logging().critical(str(e))
        sys.exit(1)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    # Store, cache and service are created in lifespan
    app = create_app(
        store_instance=None,
        cache_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
