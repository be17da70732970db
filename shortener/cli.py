#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Usage:
    shortener shorten <url> [--custom-name NAME]
    shortener resolve <short_code>
    shortener info <short_code>
    shortener sweep [--retention-days N]
    shortener init-db
    shortener health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from .common.logging_config import setup_logging
from .database.base import AliasStoreBase
from .database.cache import RedisCache
from .database.memory import InMemoryAliasStore
from .database.postgres import PostgresAliasStore
from .errors import ShortenerError
from .service import URLShortenerService
from .sweeper import RETENTION_DAYS, RetentionSweeper


def build_store(db_url: str, logger) -> AliasStoreBase:
    """Create the store for a connection URL (memory:// for a throwaway store)."""
    if db_url.startswith("memory://"):
        return InMemoryAliasStore(logger=logger)
    return PostgresAliasStore(db_config=db_url, logger=logger)


def _print_json(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)


class ShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(
        self,
        store: AliasStoreBase,
        domain: str,
        cache: Optional[RedisCache] = None,
        logger=None,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or setup_logging(level="INFO")
        self.service = URLShortenerService(
            store=store,
            domain=domain,
            cache=cache,
            logger=self.logger,
        )

    async def cleanup(self):
        """Cleanup resources."""
        await self.service.close()

    async def shorten(self, url: str, custom_name: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            result = await self.service.create_short_url(url, custom_name)
        except ShortenerError as e:
            _print_json({"success": False, "error": e.message}, error=True)
            return 1

        _print_json({
            "success": True,
            "short_code": result["short_code"],
            "short_url": result["short_url"],
            "original_url": result["original_url"],
            "created_at": result["created_at"].isoformat(),
        })
        return 0

    async def resolve(self, short_code: str, track_access: bool = False) -> int:
        """Get original URL for a short code."""
        try:
            original_url = await self.service.resolve(short_code, track_access=track_access)
        except ShortenerError as e:
            _print_json({"success": False, "short_code": short_code, "error": e.message}, error=True)
            return 1

        _print_json({
            "success": True,
            "short_code": short_code.lower(),
            "original_url": original_url,
        })
        return 0

    async def info(self, short_code: str) -> int:
        """Show the stored record for a short code."""
        try:
            record = await self.service.get_record(short_code)
        except ShortenerError as e:
            _print_json({"success": False, "error": e.message}, error=True)
            return 1

        if record is None:
            _print_json({
                "success": False,
                "error": f"Short code '{short_code}' not found",
            }, error=True)
            return 1

        _print_json({"success": True, **record.to_dict()})
        return 0

    async def sweep(self, retention_days: int = RETENTION_DAYS) -> int:
        """Run the retention sweep once."""
        sweeper = RetentionSweeper(
            store=self.store,
            cache=self.cache,
            logger=self.logger,
            retention_days=retention_days,
        )
        try:
            deleted = await sweeper.sweep()
        except ShortenerError as e:
            _print_json({"success": False, "error": e.message}, error=True)
            return 1

        _print_json({"success": True, "deleted": deleted, "retention_days": retention_days})
        return 0

    async def init_db(self) -> int:
        """Create database tables."""
        if not isinstance(self.store, PostgresAliasStore):
            _print_json({"success": True, "message": "Nothing to initialize"})
            return 0

        try:
            await self.store.ensure_tables()
        except ShortenerError as e:
            _print_json({"success": False, "error": e.message}, error=True)
            return 1

        _print_json({"success": True, "message": "Tables initialized"})
        return 0

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        _print_json({"success": health_status["overall"], "health": health_status})
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortener",
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with a custom name
  %(prog)s shorten https://example.com/long/url --custom-name my-link

  # Look up without recording an access
  %(prog)s resolve my-link

  # Delete short URLs idle for more than a year
  %(prog)s sweep
        """
    )

    parser.add_argument(
        "--db-url",
        default=os.getenv("DATABASE_URL"),
        help="PostgreSQL connection URL, or memory:// (default: from DATABASE_URL env)"
    )
    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL (optional, default: from REDIS_URL env)"
    )
    parser.add_argument(
        "--domain",
        default=os.getenv("DOMAIN", "http://localhost:3000/"),
        help="Base URL for short links (default: from DOMAIN env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-name", help="Custom short code")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("short_code", help="Short code to look up")
    resolve_parser.add_argument(
        "--track", action="store_true", help="Record the lookup as an access"
    )

    info_parser = subparsers.add_parser("info", help="Show stored record")
    info_parser.add_argument("short_code", help="Short code to show")

    sweep_parser = subparsers.add_parser("sweep", help="Delete inactive short URLs")
    sweep_parser.add_argument(
        "--retention-days", type=int, default=RETENTION_DAYS,
        help=f"Days of inactivity before deletion (default: {RETENTION_DAYS})"
    )

    subparsers.add_parser("init-db", help="Create database tables")
    subparsers.add_parser("health", help="Check store health")

    return parser


async def run(argv: Optional[List[str]] = None, store: Optional[AliasStoreBase] = None) -> int:
    """Parse arguments and execute a command.

    Args:
        argv: Arguments (defaults to sys.argv)
        store: Use this store instead of building one from --db-url
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")

    if store is None:
        if not args.db_url:
            _print_json({"success": False, "error": "DATABASE_URL is not set"}, error=True)
            return 1
        store = build_store(args.db_url, logger)

    cache = None
    if args.redis_url:
        cache = RedisCache(redis_url=args.redis_url, logger=logger)
        await cache.connect()

    cli = ShortenerCLI(store=store, domain=args.domain, cache=cache, logger=logger)

    try:
        if args.command == "shorten":
            return await cli.shorten(args.url, args.custom_name)
        elif args.command == "resolve":
            return await cli.resolve(args.short_code, track_access=args.track)
        elif args.command == "info":
            return await cli.info(args.short_code)
        elif args.command == "sweep":
            return await cli.sweep(args.retention_days)
        elif args.command == "init-db":
            return await cli.init_db()
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.cleanup()


def main():
    """Console script entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
