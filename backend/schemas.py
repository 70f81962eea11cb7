"""
Pydantic schemas for the board API.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.types import Priority, TaskStatus
from shared.utils import parse_due_date


class HealthResponse(BaseModel):
    status: Literal["ok"]
    connected: bool


class MessageResponse(BaseModel):
    success: bool
    message: str


# Contacts


class ContactPayload(BaseModel):
    name: str = Field(..., max_length=128)
    email: str = Field(..., max_length=256)
    phone: str = Field(..., max_length=64)


class ContactUpdatePayload(BaseModel):
    """Partial update; fields left out keep their stored value."""

    name: Optional[str] = Field(default=None, max_length=128)
    email: Optional[str] = Field(default=None, max_length=256)
    phone: Optional[str] = Field(default=None, max_length=64)


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str = ""
    initials: str
    color: str
    user_id: Optional[str] = None
    created_at: str = ""
    created_by: str = ""


class GroupedContactsResponse(BaseModel):
    groups: Dict[str, List[ContactResponse]]


# Tasks


class SubtaskPayload(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    completed: bool = False


class TaskCreatePayload(BaseModel):
    title: str = Field(..., max_length=256)
    due_date: str
    category: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    assigned_to: List[str] = Field(default_factory=list)
    subtasks: List[SubtaskPayload] = Field(default_factory=list)


class TaskUpdatePayload(BaseModel):
    """Partial update; only the fields that were sent are applied."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=256)
    description: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[List[str]] = None
    subtasks: Optional[List[SubtaskPayload]] = None

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and parse_due_date(value) is None:
            raise ValueError("due_date must be a date in YYYY-MM-DD format")
        return value


class SubtaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    completed: bool = False


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str = ""
    category: str
    due_date: str
    priority: Priority
    status: TaskStatus
    assigned_to: List[str] = Field(default_factory=list)
    subtasks: List[SubtaskResponse] = Field(default_factory=list)
    created_at: str = ""
    created_by: str = ""
    updated_at: str = ""


class TaskStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    todo: int
    in_progress: int
    await_feedback: int
    done: int
    urgent: int
    next_deadline: Optional[str] = None


# Auth


class RegisterPayload(BaseModel):
    name: str
    email: str
    password: str
    confirm_password: str
    privacy_accepted: bool = False


class LoginPayload(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user; the password never leaves the service."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    initials: str
    color: str
    is_guest: bool = False
    created_at: str = ""
    last_login: Optional[str] = None


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[UserResponse] = None


# Demo data


class DemoDataStatusResponse(BaseModel):
    contacts_exist: bool
    tasks_exist: bool
    contacts_count: int
    tasks_count: int
    all_exist: bool


class SeedResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    message: str = ""
    skipped: bool = False
    contacts: int = 0
    tasks: int = 0
    users: int = 0
