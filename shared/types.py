# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional


class TaskStatus(StrEnum):
    TODO = "to-do"
    IN_PROGRESS = "in-progress"
    AWAIT_FEEDBACK = "await-feedback"
    DONE = "done"


class Priority(StrEnum):
    URGENT = "urgent"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class User:
    id: str
    name: str
    email: str
    initials: str
    color: str
    password: str = ""
    is_guest: bool = False
    created_at: str = ""
    last_login: Optional[str] = None


@dataclass
class Contact:
    id: str
    name: str
    email: str
    initials: str
    color: str
    phone: str = ""
    user_id: Optional[str] = None
    created_at: str = ""
    created_by: str = ""


@dataclass
class Subtask:
    id: str
    title: str
    completed: bool = False


@dataclass
class Task:
    id: str
    title: str
    category: str
    due_date: str
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    description: str = ""
    assigned_to: List[str] = field(default_factory=list)
    subtasks: List[Subtask] = field(default_factory=list)
    created_at: str = ""
    created_by: str = ""
    updated_at: str = ""


@dataclass
class TaskStatistics:
    total: int = 0
    todo: int = 0
    in_progress: int = 0
    await_feedback: int = 0
    done: int = 0
    urgent: int = 0
    next_deadline: Optional[str] = None
