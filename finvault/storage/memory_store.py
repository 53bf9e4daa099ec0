"""Mini README: Dictionary-backed user store for tests and local demos.

Records are deep-copied on the way in and out so that, like a real
database, nothing changes until ``save_user`` is called.
"""

from __future__ import annotations

import copy
import threading
from typing import Dict, Optional

from ..errors import ConflictError, NotFoundError
from ..logging_utils import get_logger
from ..models import UserRecord
from .base import UserStore

LOGGER = get_logger(__name__)


class InMemoryUserStore(UserStore):
    """Keep user records in process memory keyed by username."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        # Handlers run in a threadpool; check-then-set must be atomic.
        self._lock = threading.Lock()
        LOGGER.debug("Initialised in-memory user store")

    def ping(self) -> None:
        return None

    def ensure_indexes(self) -> None:
        return None

    def find_user(self, username: str) -> Optional[UserRecord]:
        with self._lock:
            record = self._users.get(username)
            return copy.deepcopy(record) if record is not None else None

    def insert_user(self, record: UserRecord) -> None:
        with self._lock:
            if record.username in self._users:
                raise ConflictError("Username is already taken.")
            self._users[record.username] = copy.deepcopy(record)

    def save_user(self, record: UserRecord) -> None:
        with self._lock:
            if record.username not in self._users:
                raise NotFoundError("User not found.")
            self._users[record.username] = copy.deepcopy(record)

    def __len__(self) -> int:
        return len(self._users)
