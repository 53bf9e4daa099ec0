"""Mini README: Abstract interface for the persistent user store.

Structure:
    * UserStore - abstract base implemented by concrete storage backends.

Every mutation is a whole-document read-modify-write: callers load a
``UserRecord``, change it in memory, and hand it back to ``save_user``.
There is no version check, so two concurrent writers to the same user race
and the later write wins. Backends needing stronger guarantees should add a
per-user version field and conditional replace.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..errors import InternalError
from ..models import UserRecord


class UserStore(ABC):
    """Document collection of users keyed by unique username."""

    backend_name: str = "generic"

    @abstractmethod
    def ping(self) -> None:
        """Raise ``InternalError`` when the backend cannot be reached."""

    @abstractmethod
    def ensure_indexes(self) -> None:
        """Create the unique username index if the backend needs one."""

    @abstractmethod
    def find_user(self, username: str) -> Optional[UserRecord]:
        """Return the user stored under ``username`` or ``None``."""

    @abstractmethod
    def insert_user(self, record: UserRecord) -> None:
        """Persist a new user, raising ``ConflictError`` if the username exists."""

    @abstractmethod
    def save_user(self, record: UserRecord) -> None:
        """Replace the stored document for ``record`` in full."""

    def close(self) -> None:
        """Release backend resources. Stores without resources do nothing."""


class UnavailableUserStore(UserStore):
    """Stand-in used when the configured backend could not be built.

    Every operation raises ``InternalError`` so the process stays up and
    requests answer 500 until it is restarted with a working store.
    """

    backend_name = "unavailable"

    def __init__(self, backend_name: str) -> None:
        self.configured_backend = backend_name

    def _fail(self) -> None:
        raise InternalError()

    def ping(self) -> None:
        self._fail()

    def ensure_indexes(self) -> None:
        self._fail()

    def find_user(self, username: str) -> Optional[UserRecord]:
        self._fail()

    def insert_user(self, record: UserRecord) -> None:
        self._fail()

    def save_user(self, record: UserRecord) -> None:
        self._fail()
