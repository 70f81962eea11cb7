"""
Typed repositories over the id-keyed collections of the document store.

Each collection lives at a top-level path (`contacts`, `tasks`, `users`) as a
map from generated id to record. Records are stored in camelCase and handed
out as dataclasses, in store order.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields, is_dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from dacite import Config, DaciteError, from_dict

from backend.remote_store import join_path
from backend.sync import SyncAdapter, WriteResult
from shared.constants import (
    CONTACTS_COLLECTION,
    GUEST_USER_ID,
    TASKS_COLLECTION,
    USERS_COLLECTION,
)
from shared.json_utils import convert_keys
from shared.types import (
    Contact,
    Priority,
    Subtask,
    Task,
    TaskStatistics,
    TaskStatus,
    User,
)
from shared.utils import (
    generate_avatar_color,
    generate_id,
    generate_initials,
    parse_due_date,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

_DACITE_CONFIG = Config(cast=[TaskStatus, Priority])


def _as_subtask(value: Subtask | dict) -> Subtask:
    if isinstance(value, Subtask):
        return value
    return Subtask(
        id=value.get("id") or generate_id(),
        title=value["title"],
        completed=bool(value.get("completed", False)),
    )


def to_plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    return value


class CollectionRepository(Generic[RecordT]):
    """CRUD over one collection. Subclasses set `collection` and `record_type`."""

    collection: str
    record_type: Type[RecordT]

    def __init__(self, sync: SyncAdapter):
        self.sync = sync

    def to_record(self, item: RecordT) -> dict:
        return convert_keys(asdict(item), "snake_to_camel")

    def from_record(self, key: str, raw: dict) -> Optional[RecordT]:
        data = convert_keys(raw, "camel_to_snake")
        data["id"] = data.get("id") or key
        try:
            return from_dict(self.record_type, data, config=_DACITE_CONFIG)
        except (DaciteError, ValueError) as e:
            logger.warning("Skipping unreadable %s record %s: %s", self.collection, key, e)
            return None

    def record_path(self, record_id: str) -> str:
        return join_path(self.collection, record_id)

    async def list_all(self) -> List[RecordT]:
        items = await self.sync.get_collection(self.collection)
        records = [self.from_record(item["id"], item) for item in items]
        return [record for record in records if record is not None]

    async def find_by_id(self, record_id: str) -> Optional[RecordT]:
        if not record_id:
            return None
        raw = await self.sync.get(self.record_path(record_id))
        if not isinstance(raw, dict):
            return None
        return self.from_record(record_id, raw)

    async def new_id(self) -> str:
        existing = {record.id for record in await self.list_all()}
        record_id = generate_id()
        while record_id in existing:
            record_id = generate_id()
        return record_id

    async def insert(self, record: RecordT) -> WriteResult:
        result = await self.sync.save(self.record_path(record.id), self.to_record(record))
        if not result.success:
            logger.error("Remote write of %s %s failed: %s", self.collection, record.id, result.error)
        return result

    def prepare_update(self, current: RecordT, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for subclasses to derive fields before the merge."""
        return updates

    async def update(self, record_id: str, updates: Dict[str, Any]) -> Optional[RecordT]:
        """Shallow-merges `updates` (field name -> value) into the record."""
        current = await self.find_by_id(record_id)
        if current is None:
            return None

        known = {f.name for f in fields(self.record_type)}
        unknown = set(updates) - known
        if unknown:
            raise ValueError(f"Unknown {self.collection} fields: {sorted(unknown)}")

        updates = self.prepare_update(current, {k: to_plain(v) for k, v in updates.items() if k != "id"})
        merged = {**asdict(current), **updates, "id": current.id}
        record = from_dict(self.record_type, merged, config=_DACITE_CONFIG)
        await self.insert(record)
        return record

    async def delete(self, record_id: str) -> bool:
        if await self.find_by_id(record_id) is None:
            return False
        result = await self.sync.delete(self.record_path(record_id))
        if not result.success:
            logger.error("Remote delete of %s %s failed: %s", self.collection, record_id, result.error)
        return True


class UserRepository(CollectionRepository[User]):
    collection = USERS_COLLECTION
    record_type = User

    async def create(self, name: str, email: str, password: str) -> User:
        user = User(
            id=await self.new_id(),
            name=name,
            email=email.lower(),
            password=password,
            initials=generate_initials(name),
            color=generate_avatar_color(),
            is_guest=False,
            created_at=utc_now_iso(),
            last_login=None,
        )
        await self.insert(user)
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        email = (email or "").lower()
        for user in await self.list_all():
            if user.email.lower() == email:
                return user
        return None

    async def touch_last_login(self, user_id: str) -> Optional[User]:
        return await self.update(user_id, {"last_login": utc_now_iso()})


class TaskRepository(CollectionRepository[Task]):
    collection = TASKS_COLLECTION
    record_type = Task

    async def create(
        self,
        title: str,
        category: str,
        due_date: str,
        *,
        description: str = "",
        priority: Priority | str = Priority.MEDIUM,
        status: TaskStatus | str = TaskStatus.TODO,
        assigned_to: Optional[List[str]] = None,
        subtasks: Optional[List[Subtask | dict]] = None,
        created_by: str = GUEST_USER_ID,
    ) -> Task:
        now = utc_now_iso()
        task = Task(
            id=await self.new_id(),
            title=title,
            description=description or "",
            category=category,
            due_date=due_date,
            priority=Priority(priority),
            status=TaskStatus(status),
            assigned_to=list(assigned_to or []),
            subtasks=[_as_subtask(s) for s in subtasks or []],
            created_at=now,
            created_by=created_by,
            updated_at=now,
        )
        await self.insert(task)
        return task

    def prepare_update(self, current: Task, updates: Dict[str, Any]) -> Dict[str, Any]:
        if "subtasks" in updates:
            updates["subtasks"] = [
                asdict(_as_subtask(s)) for s in updates["subtasks"] or []
            ]
        return {**updates, "updated_at": utc_now_iso()}

    async def move(self, task_id: str, status: TaskStatus | str) -> Optional[Task]:
        return await self.update(task_id, {"status": TaskStatus(status)})

    async def list_by_status(self, status: TaskStatus | str) -> List[Task]:
        status = TaskStatus(status)
        return [task for task in await self.list_all() if task.status == status]

    async def search(self, term: str) -> List[Task]:
        tasks = await self.list_all()
        term = (term or "").strip().lower()
        if not term:
            return tasks
        return [
            task
            for task in tasks
            if term in task.title.lower() or term in (task.description or "").lower()
        ]

    async def statistics(self) -> TaskStatistics:
        tasks = await self.list_all()
        stats = TaskStatistics(
            total=len(tasks),
            todo=sum(1 for t in tasks if t.status == TaskStatus.TODO),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
            await_feedback=sum(1 for t in tasks if t.status == TaskStatus.AWAIT_FEEDBACK),
            done=sum(1 for t in tasks if t.status == TaskStatus.DONE),
            urgent=sum(1 for t in tasks if t.priority == Priority.URGENT),
        )
        deadlines = []
        for t in tasks:
            if t.priority != Priority.URGENT or t.status == TaskStatus.DONE:
                continue
            due = parse_due_date(t.due_date)
            if due is None:
                logger.warning("Task %s has an unreadable due date: %r", t.id, t.due_date)
                continue
            deadlines.append((due, t.due_date))
        if deadlines:
            stats.next_deadline = min(deadlines)[1]
        return stats

    async def toggle_subtask(self, task_id: str, subtask_id: str) -> Optional[Task]:
        task = await self.find_by_id(task_id)
        if task is None or not task.subtasks:
            return None
        subtasks = [Subtask(s.id, s.title, s.completed) for s in task.subtasks]
        for subtask in subtasks:
            if subtask.id == subtask_id:
                subtask.completed = not subtask.completed
                break
        else:
            return None
        return await self.update(task_id, {"subtasks": subtasks})

    async def assignment_removals(self, contact_id: str) -> Dict[str, Any]:
        """Multi-path update values that strip a contact from every task."""
        now = utc_now_iso()
        removals: Dict[str, Any] = {}
        for task in await self.list_all():
            if contact_id not in task.assigned_to:
                continue
            remaining = [cid for cid in task.assigned_to if cid != contact_id]
            removals[join_path(self.collection, task.id, "assignedTo")] = remaining
            removals[join_path(self.collection, task.id, "updatedAt")] = now
        return removals


class ContactRepository(CollectionRepository[Contact]):
    collection = CONTACTS_COLLECTION
    record_type = Contact

    def __init__(self, sync: SyncAdapter, tasks: TaskRepository):
        super().__init__(sync)
        self.tasks = tasks

    async def create(
        self,
        name: str,
        email: str,
        phone: str = "",
        *,
        created_by: str = GUEST_USER_ID,
    ) -> Contact:
        contact = Contact(
            id=await self.new_id(),
            name=name,
            email=email,
            phone=phone,
            initials=generate_initials(name),
            color=generate_avatar_color(),
            user_id=None,
            created_at=utc_now_iso(),
            created_by=created_by,
        )
        await self.insert(contact)
        return contact

    async def add_user_as_contact(self, user: User) -> Contact:
        contact = Contact(
            id=user.id,
            name=user.name,
            email=user.email,
            phone="",
            initials=user.initials,
            color=user.color,
            user_id=user.id,
            created_at=user.created_at,
            created_by=user.id,
        )
        await self.insert(contact)
        return contact

    def prepare_update(self, current: Contact, updates: Dict[str, Any]) -> Dict[str, Any]:
        name = updates.get("name")
        if name and name != current.name:
            return {**updates, "initials": generate_initials(name)}
        return updates

    async def find_by_email(self, email: str) -> Optional[Contact]:
        email = (email or "").strip().lower()
        for contact in await self.list_all():
            if contact.email.lower() == email:
                return contact
        return None

    async def grouped(self) -> Dict[str, List[Contact]]:
        """Contacts sorted by name, grouped by upper-cased first letter."""
        grouped: Dict[str, List[Contact]] = {}
        for contact in sorted(await self.list_all(), key=lambda c: c.name.lower()):
            grouped.setdefault(contact.name[:1].upper(), []).append(contact)
        return grouped

    async def delete(self, record_id: str) -> bool:
        """Deletes the contact and unassigns it from every task in one write."""
        if await self.find_by_id(record_id) is None:
            return False
        values: Dict[str, Any] = {self.record_path(record_id): None}
        values.update(await self.tasks.assignment_removals(record_id))
        result = await self.sync.update("", values)
        if not result.success:
            logger.error("Remote delete of contact %s failed: %s", record_id, result.error)
        return True
