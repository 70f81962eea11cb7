"""
Caller-level flows: form validation and duplicate checks run here before any
repository write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from backend.repositories import ContactRepository, TaskRepository, UserRepository
from backend.session import SessionStore
from shared.constants import (
    GUEST_USER_COLOR,
    GUEST_USER_EMAIL,
    GUEST_USER_ID,
    GUEST_USER_INITIALS,
    GUEST_USER_NAME,
    MIN_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from shared.types import Priority, TaskStatus, User
from shared.utils import is_valid_email, parse_due_date, utc_now_iso

logger = logging.getLogger(__name__)

# ServiceResult.error codes
VALIDATION = "validation"
DUPLICATE_EMAIL = "duplicate_email"
INVALID_CREDENTIALS = "invalid_credentials"
NOT_FOUND = "not_found"


@dataclass
class ServiceResult:
    success: bool
    message: str = ""
    data: Any = None
    error: Optional[str] = None


def _fail(message: str, error: str = VALIDATION) -> ServiceResult:
    return ServiceResult(success=False, message=message, error=error)


def validate_signup(
    name: str,
    email: str,
    password: str,
    confirm_password: str,
    privacy_accepted: bool,
) -> Optional[str]:
    if len(name) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters long"
    if not is_valid_email(email):
        return "Please enter a valid email address"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if password != confirm_password:
        return "Passwords do not match"
    if not privacy_accepted:
        return "Please accept the privacy policy"
    return None


def validate_contact_form(name: str, email: str, phone: str) -> Optional[str]:
    if len(name) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters long"
    if not is_valid_email(email):
        return "Please enter a valid email address"
    if not phone:
        return "Phone number is required"
    return None


def validate_task_form(title: str, due_date: str, category: str) -> Optional[str]:
    if not title:
        return "Title is required"
    if not due_date:
        return "Due date is required"
    if parse_due_date(due_date) is None:
        return "Due date must be a date in YYYY-MM-DD format"
    if not category:
        return "Category is required"
    return None


def create_guest_user() -> User:
    now = utc_now_iso()
    return User(
        id=GUEST_USER_ID,
        name=GUEST_USER_NAME,
        email=GUEST_USER_EMAIL,
        initials=GUEST_USER_INITIALS,
        color=GUEST_USER_COLOR,
        is_guest=True,
        created_at=now,
        last_login=now,
    )


class AuthService:
    def __init__(self, users: UserRepository, contacts: ContactRepository, session: SessionStore):
        self.users = users
        self.contacts = contacts
        self.session = session

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        privacy_accepted: bool = True,
    ) -> ServiceResult:
        name, email = name.strip(), email.strip()
        problem = validate_signup(name, email, password, confirm_password, privacy_accepted)
        if problem:
            return _fail(problem)

        if await self.users.find_by_email(email):
            return _fail("An account with this email already exists", DUPLICATE_EMAIL)

        user = await self.users.create(name, email, password)
        await self.contacts.add_user_as_contact(user)
        logger.info("Registered user %s", user.id)
        return ServiceResult(success=True, message="Account created successfully", data=user)

    async def login(self, email: str, password: str) -> ServiceResult:
        user = await self.users.find_by_email(email.strip())
        if user is None or user.password != password:
            return _fail("Invalid email or password", INVALID_CREDENTIALS)

        user = await self.users.touch_last_login(user.id) or user
        self.session.set_current_user(user)
        return ServiceResult(success=True, message="Login successful", data=user)

    def guest_login(self) -> ServiceResult:
        guest = create_guest_user()
        self.session.set_current_user(guest)
        return ServiceResult(success=True, message="Logged in as guest", data=guest)

    def logout(self) -> None:
        self.session.clear_current_user()

    def current_user(self) -> Optional[User]:
        return self.session.get_current_user()


class ContactService:
    def __init__(self, contacts: ContactRepository, session: SessionStore):
        self.contacts = contacts
        self.session = session

    async def _email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        existing = await self.contacts.find_by_email(email)
        return existing is not None and existing.id != exclude_id

    async def add_contact(self, name: str, email: str, phone: str) -> ServiceResult:
        name, email, phone = name.strip(), email.strip(), phone.strip()
        problem = validate_contact_form(name, email, phone)
        if problem:
            return _fail(problem)
        if await self._email_taken(email):
            return _fail("A contact with this email already exists", DUPLICATE_EMAIL)

        contact = await self.contacts.create(
            name,
            email,
            phone,
            created_by=self.session.current_user_id(GUEST_USER_ID),
        )
        return ServiceResult(success=True, message="Contact successfully created", data=contact)

    async def edit_contact(
        self,
        contact_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> ServiceResult:
        """Fields passed as None keep their stored value."""
        current = await self.contacts.find_by_id(contact_id)
        if current is None:
            return _fail("Contact not found", NOT_FOUND)

        name = (current.name if name is None else name).strip()
        email = (current.email if email is None else email).strip()
        phone = (current.phone if phone is None else phone).strip()
        problem = validate_contact_form(name, email, phone)
        if problem:
            return _fail(problem)
        if await self._email_taken(email, exclude_id=contact_id):
            return _fail("A contact with this email already exists", DUPLICATE_EMAIL)

        contact = await self.contacts.update(
            contact_id, {"name": name, "email": email, "phone": phone}
        )
        if contact is None:
            return _fail("Contact not found", NOT_FOUND)
        return ServiceResult(success=True, message="Contact updated successfully", data=contact)

    async def delete_contact(self, contact_id: str) -> ServiceResult:
        if not await self.contacts.delete(contact_id):
            return _fail("Contact not found", NOT_FOUND)
        return ServiceResult(success=True, message="Contact deleted successfully")


class TaskService:
    def __init__(self, tasks: TaskRepository, session: SessionStore):
        self.tasks = tasks
        self.session = session

    async def add_task(
        self,
        title: str,
        due_date: str,
        category: str,
        *,
        description: str = "",
        priority: str = Priority.MEDIUM,
        status: str = TaskStatus.TODO,
        assigned_to: Optional[List[str]] = None,
        subtasks: Optional[List[dict]] = None,
    ) -> ServiceResult:
        title, description = (title or "").strip(), (description or "").strip()
        problem = validate_task_form(title, due_date, category)
        if problem:
            return _fail(problem)
        try:
            priority, status = Priority(priority), TaskStatus(status)
        except ValueError as e:
            return _fail(str(e))

        task = await self.tasks.create(
            title,
            category,
            due_date,
            description=description,
            priority=priority,
            status=status,
            assigned_to=assigned_to,
            subtasks=subtasks,
            created_by=self.session.current_user_id(GUEST_USER_ID),
        )
        return ServiceResult(success=True, message="Task added to board", data=task)
