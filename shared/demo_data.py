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

"""Fixed sample records, in their stored (camelCase) form."""

DEMO_TIMESTAMP = "2024-01-01T10:00:00.000Z"


def _contact(
    index: int,
    name: str,
    email: str,
    phone: str,
    initials: str,
    color: str,
    created_by: str,
) -> dict:
    return {
        "id": f"contact_demo_{index}",
        "name": name,
        "email": email,
        "phone": phone,
        "initials": initials,
        "color": color,
        "userId": None,
        "createdAt": DEMO_TIMESTAMP,
        "createdBy": created_by,
    }


def _subtask(index: int, title: str, completed: bool = False) -> dict:
    return {"id": f"subtask_{index}", "title": title, "completed": completed}


DEMO_CONTACTS = [
    _contact(1, "Sofia Müller", "sofia@gmail.com", "+49 1111 11 111", "SM", "#FF5EB3", "user_demo_1"),
    _contact(2, "Marcel Bauer", "marcel@gmail.com", "+49 2222 22 222", "MB", "#1FD7C1", "user_demo_1"),
    _contact(3, "Benedikt Ziegler", "benedikt@gmail.com", "+49 3333 33 333", "BZ", "#462F8A", "user_demo_2"),
    _contact(4, "Laura Schmidt", "laura@gmail.com", "+49 4444 44 444", "LS", "#FF7A00", "user_demo_1"),
    _contact(5, "Thomas Weber", "thomas@gmail.com", "+49 5555 55 555", "TW", "#9327FF", "user_demo_1"),
    _contact(6, "Nina Fischer", "nina@gmail.com", "+49 6666 66 666", "NF", "#7AE229", "user_demo_1"),
    _contact(7, "Felix Wagner", "felix@gmail.com", "+49 7777 77 777", "FW", "#FF3D00", "user_demo_2"),
    _contact(8, "Sarah Meyer", "sarah@gmail.com", "+49 8888 88 888", "SM", "#FFBB2B", "user_demo_2"),
    _contact(9, "Max Hoffmann", "max@gmail.com", "+49 9999 99 999", "MH", "#0038FF", "user_demo_2"),
    _contact(10, "Julia Becker", "julia@gmail.com", "+49 1010 10 101", "JB", "#FF5EB3", "user_demo_1"),
]

DEMO_TASKS = [
    {
        "id": "task_demo_1",
        "title": "CSS Architecture Planning",
        "description": "Define CSS naming conventions, create style guide, and establish component structure for scalable styling.",
        "category": "Technical Task",
        "dueDate": "2025-12-25",
        "priority": "medium",
        "status": "in-progress",
        "assignedTo": ["contact_demo_1", "contact_demo_2"],
        "subtasks": [
            _subtask(1, "Research CSS methodologies", True),
            _subtask(2, "Create style guide document"),
            _subtask(3, "Set up component library"),
        ],
        "createdAt": DEMO_TIMESTAMP,
        "createdBy": "user_demo_1",
        "updatedAt": DEMO_TIMESTAMP,
    },
    {
        "id": "task_demo_2",
        "title": "User Registration Flow",
        "description": "Implement complete user registration with validation, email verification, and welcome sequence.",
        "category": "User Story",
        "dueDate": "2025-12-20",
        "priority": "urgent",
        "status": "to-do",
        "assignedTo": ["contact_demo_1"],
        "subtasks": [
            _subtask(4, "Design registration form"),
            _subtask(5, "Add form validation"),
        ],
        "createdAt": DEMO_TIMESTAMP,
        "createdBy": "user_demo_1",
        "updatedAt": DEMO_TIMESTAMP,
    },
    {
        "id": "task_demo_3",
        "title": "Database Optimization",
        "description": "Optimize database queries and implement caching for better performance.",
        "category": "Technical Task",
        "dueDate": "2025-12-30",
        "priority": "low",
        "status": "await-feedback",
        "assignedTo": ["contact_demo_2"],
        "subtasks": [],
        "createdAt": DEMO_TIMESTAMP,
        "createdBy": "user_demo_2",
        "updatedAt": DEMO_TIMESTAMP,
    },
    {
        "id": "task_demo_4",
        "title": "Mobile App Testing",
        "description": "Comprehensive testing of mobile app functionality across different devices and operating systems.",
        "category": "User Story",
        "dueDate": "2025-12-15",
        "priority": "medium",
        "status": "done",
        "assignedTo": ["contact_demo_1", "contact_demo_2"],
        "subtasks": [
            _subtask(6, "iOS testing", True),
            _subtask(7, "Android testing", True),
        ],
        "createdAt": DEMO_TIMESTAMP,
        "createdBy": "user_demo_2",
        "updatedAt": DEMO_TIMESTAMP,
    },
    {
        "id": "task_demo_5",
        "title": "API Documentation",
        "description": "Create comprehensive API documentation with examples and best practices guide.",
        "category": "Technical Task",
        "dueDate": "2025-12-18",
        "priority": "urgent",
        "status": "to-do",
        "assignedTo": ["contact_demo_4", "contact_demo_5"],
        "subtasks": [
            _subtask(8, "Write endpoint descriptions"),
            _subtask(9, "Add code examples"),
        ],
        "createdAt": DEMO_TIMESTAMP,
        "createdBy": "user_demo_1",
        "updatedAt": DEMO_TIMESTAMP,
    },
]

# Demo accounts log in with plaintext passwords.
DEMO_USERS = [
    {
        "id": "user_demo_1",
        "name": "Anton Mayer",
        "email": "anton@gmail.com",
        "password": "demo123",
        "initials": "AM",
        "color": "#FF7A00",
        "isGuest": False,
        "createdAt": DEMO_TIMESTAMP,
        "lastLogin": None,
    },
    {
        "id": "user_demo_2",
        "name": "Anja Schulz",
        "email": "anja@gmail.com",
        "password": "demo123",
        "initials": "AS",
        "color": "#9327FF",
        "isGuest": False,
        "createdAt": DEMO_TIMESTAMP,
        "lastLogin": None,
    },
]
