"""
Admin tool for the board's demo data: inspect, upload, reset and migrate.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.dependencies import get_board_context
from shared.constants import COLLECTIONS

logger = logging.getLogger(__name__)


async def run(command: str, force: bool = False) -> int:
    ctx = get_board_context()
    try:
        if command == "status":
            status = await ctx.seeder.check()
            print(json.dumps({**asdict(status), "all_exist": status.all_exist}, indent=2))
            return 0

        if command == "migrate":
            failed = 0
            for collection in COLLECTIONS:
                result = await ctx.sync.migrate_local_to_remote(collection, collection)
                if not result.success:
                    logger.error("Migration of %s failed: %s", collection, result.error)
                    failed += 1
            return 1 if failed else 0

        if command == "upload":
            result = await ctx.seeder.upload(force=force)
        elif command == "reset":
            result = await ctx.seeder.reset()
        elif command == "initialize":
            result = await ctx.seeder.initialize()
        elif command == "init-users":
            result = await ctx.seeder.initialize_demo_users()
        else:
            raise ValueError(f"Unknown command: {command}")

        if not result.success:
            logger.error(result.error)
            return 1
        logger.info(
            "%s (contacts: %d, tasks: %d, users: %d)",
            result.message,
            result.contacts,
            result.tasks,
            result.users,
        )
        return 0
    finally:
        ctx.sync.shutdown()


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage the board's demo data")
    parser.add_argument(
        "command",
        choices=["status", "upload", "reset", "initialize", "init-users", "migrate"],
        help="Operation to run against the configured database",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="With upload: overwrite existing contacts and tasks",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    return asyncio.run(run(args.command, force=args.force))


if __name__ == "__main__":
    raise SystemExit(main())
