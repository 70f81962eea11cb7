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

import random
import re
import string
import time
from datetime import date, datetime, timezone
from typing import Optional

from shared.constants import AVATAR_COLORS

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def generate_id() -> str:
    """Returns an id of the form `id_<epoch millis>_<9 base36 chars>`."""
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=9))
    return f"id_{int(time.time() * 1000)}_{suffix}"


def generate_initials(name: str) -> str:
    return "".join(word[:1].upper() for word in name.split(" "))[:2]


def generate_avatar_color() -> str:
    return random.choice(AVATAR_COLORS)


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email or ""))


def utc_now_iso() -> str:
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="microseconds")
        .replace("+00:00", "Z")
    )


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_due_date(value: str) -> Optional[date]:
    """Parses a `YYYY-MM-DD` due date; returns None for anything else."""
    try:
        return datetime.strptime(value or "", "%Y-%m-%d").date()
    except ValueError:
        return None
