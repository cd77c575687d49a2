#!/usr/bin/env python3
"""
Command-line interface for the link shortener.

Usage:
    shortlink shorten <url>
    shortlink get <code>
    shortlink stats <code>
    shortlink list [--limit N]
    shortlink health
    shortlink init-db
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional

from config import Config
from .common.logging_config import setup_logging
from .errors import NotFoundError, ShortlinkError
from .service import LinkService, build_service


class ShortlinkCLI:
    """Command-line interface over LinkService."""

    def __init__(self, db_url: str, redis_url: Optional[str] = None, verbose: bool = False):
        self.config = Config(database_url=db_url, redis_url=redis_url)
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service: Optional[LinkService] = None

    async def initialize(self):
        """Initialize store, cache and service."""
        self.service = await build_service(self.config, logger=self.logger)

    async def cleanup(self):
        if self.service:
            await self.service.close()

    def _ok(self, **payload) -> int:
        print(json.dumps({"success": True, **payload}, indent=2))
        return 0

    def _fail(self, error: str) -> int:
        print(json.dumps({"success": False, "error": error}, indent=2), file=sys.stderr)
        return 1

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            link = await self.service.create_link(url)
        except ShortlinkError as e:
            return self._fail(str(e))
        return self._ok(
            id=link.id,
            url=link.url,
            created_at=link.created_at.isoformat(),
            message=f"Successfully shortened URL to: {link.id}",
        )

    async def get(self, link_id: str) -> int:
        """Print the target URL without counting a click."""
        try:
            link = await self.service.get_link(link_id)
        except ShortlinkError as e:
            return self._fail(str(e))
        return self._ok(id=link.id, url=link.url)

    async def stats(self, link_id: str) -> int:
        """Print the full record for a link."""
        try:
            link = await self.service.get_link(link_id)
        except NotFoundError as e:
            return self._fail(str(e))
        except ShortlinkError as e:
            return self._fail(f"Error: {e}")
        return self._ok(**link.to_dict())

    async def list_links(self, limit: int = 100) -> int:
        """List recent links."""
        try:
            links = await self.service.list_recent(limit)
        except ShortlinkError as e:
            return self._fail(f"Error: {e}")
        return self._ok(count=len(links), links=[link.to_dict() for link in links])

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        if not health_status["overall"]:
            print(json.dumps({"success": False, "health": health_status}, indent=2))
            return 1
        stats = await self.service.get_statistics()
        return self._ok(health=health_status, statistics=stats)

    async def init_db(self) -> int:
        """Create the links table."""
        try:
            await self.service.store.ensure_schema()
        except ShortlinkError as e:
            return self._fail(f"Error initializing tables: {e}")
        return self._ok(message="Tables initialized")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortlink",
        description="Link shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shorten https://example.com/long/url
  %(prog)s get ab12cd
  %(prog)s stats ab12cd
  %(prog)s list --limit 10
        """,
    )
    parser.add_argument(
        "--db-url",
        default=os.getenv("DATABASE_URL", "memory://"),
        help="Link store URL (default: from DATABASE_URL env or memory://)",
    )
    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL (optional, default: from REDIS_URL env)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("link_id", help="Short code to look up")

    stats_parser = subparsers.add_parser("stats", help="Show a link with its click count")
    stats_parser.add_argument("link_id", help="Short code to show")

    list_parser = subparsers.add_parser("list", help="List recent links")
    list_parser.add_argument("--limit", type=int, default=100, help="Maximum number to return")

    subparsers.add_parser("health", help="Check service health")
    subparsers.add_parser("init-db", help="Create the links table")

    return parser


async def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = ShortlinkCLI(db_url=args.db_url, redis_url=args.redis_url, verbose=args.verbose)

    try:
        try:
            await cli.initialize()
        except (ShortlinkError, ValueError) as e:
            return cli._fail(f"Error initializing: {e}")

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "get":
            return await cli.get(args.link_id)
        elif args.command == "stats":
            return await cli.stats(args.link_id)
        elif args.command == "list":
            return await cli.list_links(args.limit)
        elif args.command == "health":
            return await cli.health()
        elif args.command == "init-db":
            return await cli.init_db()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.cleanup()


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
