"""
Demo data seeding: fills empty collections with the fixed sample contacts,
tasks and users, and resets the board back to that set on request.

Contacts and tasks are always written together in a single multi-path update
so the store never ends up holding one without the other.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Optional

from backend.remote_store import join_path
from backend.sync import SyncAdapter, list_to_collection
from shared.constants import CONTACTS_COLLECTION, TASKS_COLLECTION, USERS_COLLECTION
from shared.demo_data import DEMO_CONTACTS, DEMO_TASKS, DEMO_USERS

logger = logging.getLogger(__name__)


@dataclass
class DemoDataStatus:
    contacts_exist: bool = False
    tasks_exist: bool = False
    contacts_count: int = 0
    tasks_count: int = 0

    @property
    def all_exist(self) -> bool:
        return self.contacts_exist and self.tasks_exist


@dataclass
class SeedResult:
    success: bool
    message: str = ""
    error: Optional[str] = None
    skipped: bool = False
    contacts: int = 0
    tasks: int = 0
    users: int = 0


def _demo_board() -> dict:
    return {
        CONTACTS_COLLECTION: list_to_collection(copy.deepcopy(DEMO_CONTACTS)),
        TASKS_COLLECTION: list_to_collection(copy.deepcopy(DEMO_TASKS)),
    }


class DemoDataSeeder:
    def __init__(self, sync: SyncAdapter):
        self.sync = sync

    async def check(self) -> DemoDataStatus:
        contacts = await self.sync.get(CONTACTS_COLLECTION) or {}
        tasks = await self.sync.get(TASKS_COLLECTION) or {}
        return DemoDataStatus(
            contacts_exist=len(contacts) > 0,
            tasks_exist=len(tasks) > 0,
            contacts_count=len(contacts),
            tasks_count=len(tasks),
        )

    async def upload(self, force: bool = False) -> SeedResult:
        """Writes the demo contacts and tasks unless both already exist."""
        if not force:
            status = await self.check()
            if status.all_exist:
                logger.info("Demo data already exists")
                return SeedResult(
                    success=True,
                    message="Demo data already exists",
                    skipped=True,
                    contacts=status.contacts_count,
                    tasks=status.tasks_count,
                )

        # Replacing both top-level collections in one update drops any
        # existing records along with writing the demo set.
        result = await self.sync.update("", _demo_board())
        if not result.success:
            logger.error("Error uploading demo data: %s", result.error)
            return SeedResult(success=False, error=f"Failed to upload demo data: {result.error}")

        logger.info("All demo data uploaded successfully")
        return SeedResult(
            success=True,
            message="All demo data uploaded successfully",
            contacts=len(DEMO_CONTACTS),
            tasks=len(DEMO_TASKS),
        )

    async def reset(self) -> SeedResult:
        """Deletes all contacts and tasks and uploads a fresh demo set."""
        logger.info("Resetting database to demo data")
        result = await self.upload(force=True)
        if not result.success:
            return SeedResult(success=False, error=result.error)
        return SeedResult(
            success=True,
            message="Database reset to demo data successfully",
            contacts=result.contacts,
            tasks=result.tasks,
        )

    async def initialize(self) -> SeedResult:
        """Seeds once; a no-op when both collections already hold data."""
        status = await self.check()
        if status.all_exist:
            logger.info(
                "Demo data already exists (contacts: %d, tasks: %d)",
                status.contacts_count,
                status.tasks_count,
            )
            return SeedResult(
                success=True,
                message="Demo data already exists",
                skipped=True,
                contacts=status.contacts_count,
                tasks=status.tasks_count,
            )
        logger.info("No demo data found, initializing")
        return await self.upload(force=True)

    async def initialize_demo_users(self) -> SeedResult:
        """Creates the demo accounts and their linked contacts if no users exist."""
        users = await self.sync.get(USERS_COLLECTION)
        if users:
            return SeedResult(success=True, message="Users already exist", skipped=True, users=len(users))

        values: dict = {USERS_COLLECTION: list_to_collection(copy.deepcopy(DEMO_USERS))}
        for user in DEMO_USERS:
            values[join_path(CONTACTS_COLLECTION, user["id"])] = {
                "id": user["id"],
                "name": user["name"],
                "email": user["email"],
                "phone": "",
                "initials": user["initials"],
                "color": user["color"],
                "userId": user["id"],
                "createdAt": user["createdAt"],
                "createdBy": user["id"],
            }
        result = await self.sync.update("", values)
        if not result.success:
            return SeedResult(success=False, error=f"Failed to create demo users: {result.error}")
        logger.info("Demo users initialized")
        return SeedResult(success=True, message="Demo users initialized", users=len(DEMO_USERS))
