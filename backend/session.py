"""
Current-user session kept in local persistent storage.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, replace
from typing import Optional

from dacite import DaciteError, from_dict

from backend.local_cache import LocalCache
from shared.constants import CURRENT_USER_KEY
from shared.json_utils import convert_keys
from shared.types import User

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, cache: LocalCache, key: str = CURRENT_USER_KEY):
        self.cache = cache
        self.key = key

    def get_current_user(self) -> Optional[User]:
        raw = self.cache.get_item(self.key)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            return from_dict(User, convert_keys(data, "camel_to_snake"))
        except (ValueError, DaciteError) as e:
            logger.warning("Discarding unreadable session: %s", e)
            return None

    def set_current_user(self, user: User) -> None:
        # The stored session never carries the password.
        record = asdict(replace(user, password=""))
        self.cache.set_item(self.key, json.dumps(convert_keys(record, "snake_to_camel")))

    def clear_current_user(self) -> None:
        self.cache.remove_item(self.key)

    def current_user_id(self, default: str) -> str:
        user = self.get_current_user()
        return user.id if user else default
