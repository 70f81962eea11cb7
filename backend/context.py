"""
Application state for one board: the sync adapter and everything built on it.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.local_cache import LocalCache
from backend.remote_store import RemoteStore
from backend.repositories import ContactRepository, TaskRepository, UserRepository
from backend.seed import DemoDataSeeder
from backend.services import AuthService, ContactService, TaskService
from backend.session import SessionStore
from backend.sync import SyncAdapter


@dataclass
class BoardContext:
    sync: SyncAdapter
    session: SessionStore
    users: UserRepository
    contacts: ContactRepository
    tasks: TaskRepository
    seeder: DemoDataSeeder
    auth: AuthService
    contact_service: ContactService
    task_service: TaskService


def build_context(remote: RemoteStore, cache: LocalCache) -> BoardContext:
    sync = SyncAdapter(remote, cache)
    session = SessionStore(cache)
    users = UserRepository(sync)
    tasks = TaskRepository(sync)
    contacts = ContactRepository(sync, tasks)
    return BoardContext(
        sync=sync,
        session=session,
        users=users,
        contacts=contacts,
        tasks=tasks,
        seeder=DemoDataSeeder(sync),
        auth=AuthService(users, contacts, session),
        contact_service=ContactService(contacts, session),
        task_service=TaskService(tasks, session),
    )
