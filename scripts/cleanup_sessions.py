#!/usr/bin/env python3
"""Delete old, expired and revoked session rows.

Usage:
    python scripts/cleanup_sessions.py [options]

Options:
    --all        Delete all sessions older than --days (default 30)
    --expired    Delete expired sessions
    --revoked    Delete revoked sessions older than --days (default 7)
    --stats      Show session statistics
    --days N     Age threshold in days

With no action flag only the statistics are printed.
"""
import argparse
import asyncio
import logging
import sys
from typing import Optional

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.session_maintenance import SessionMaintenanceService

logger = logging.getLogger("cleanup_sessions")


def print_stats(title: str, stats: dict) -> None:
    print(f"\n{title}:")
    print(f"  Total sessions:   {stats['total']}")
    print(f"  Active sessions:  {stats['active']}")
    print(f"  Revoked sessions: {stats['revoked']}")
    print(f"  Expired sessions: {stats['expired']}")
    print("")


async def run_cleanup(
    service: SessionMaintenanceService,
    cleanup_all: bool = False,
    expired: bool = False,
    revoked: bool = False,
    stats: bool = False,
    days: Optional[int] = None,
) -> dict:
    """Run the requested cleanup steps and return the deleted counts"""
    deleted = {}
    any_cleanup = cleanup_all or expired or revoked

    if stats or not any_cleanup:
        print_stats("Session Statistics", await service.get_session_stats())

    if cleanup_all:
        old_days = days if days is not None else ApplicationConfig.SESSION_CLEANUP_DAYS
        print(f"Cleaning up sessions older than {old_days} days...")
        deleted["old"] = await service.cleanup_old_sessions(old_days)
        print(f"Deleted {deleted['old']} old sessions")

    if expired:
        print("Cleaning up expired sessions...")
        deleted["expired"] = await service.cleanup_expired_sessions()
        print(f"Deleted {deleted['expired']} expired sessions")

    if revoked:
        revoked_days = (
            days if days is not None else ApplicationConfig.REVOKED_SESSION_RETENTION_DAYS
        )
        print(f"Cleaning up revoked sessions older than {revoked_days} days...")
        deleted["revoked"] = await service.cleanup_revoked_sessions(revoked_days)
        print(f"Deleted {deleted['revoked']} revoked sessions")

    if any_cleanup:
        print_stats("Updated Session Statistics", await service.get_session_stats())

    return deleted


async def main_async(args: argparse.Namespace) -> dict:
    from src.depends import AsyncSessionLocal, engine

    try:
        async with AsyncSessionLocal() as session:
            service = SessionMaintenanceService(SqlAlchemyUnitOfWork(session))
            return await run_cleanup(
                service,
                cleanup_all=args.all,
                expired=args.expired,
                revoked=args.revoked,
                stats=args.stats,
                days=args.days,
            )
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Clean up session rows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--all", action="store_true", help="Delete all old sessions")
    parser.add_argument("--expired", action="store_true", help="Delete expired sessions")
    parser.add_argument("--revoked", action="store_true", help="Delete old revoked sessions")
    parser.add_argument("--stats", action="store_true", help="Show session statistics")
    parser.add_argument("--days", type=int, default=None, help="Age threshold in days")
    return parser


def main():
    args = build_parser().parse_args()
    if args.days is not None and args.days < 0:
        print("Error: --days must not be negative")
        sys.exit(1)

    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL.upper())

    print("Session Cleanup")
    print("===============")

    try:
        asyncio.run(main_async(args))
    except Exception as e:
        logger.exception("Session cleanup failed")
        print(f"Error: {e}")
        sys.exit(1)

    print("Session cleanup completed")


if __name__ == "__main__":
    main()
