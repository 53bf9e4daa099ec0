"""Mini README: Persistent user store package.

The package is divided into ``base`` for the abstract interface,
``mongo_store`` for the production pymongo backend, and ``memory_store``
for a dependency-free backend used by tests. ``create_user_store`` picks
one from configuration.
"""

from __future__ import annotations

from ..configuration import FinvaultSettings
from ..errors import InternalError
from ..logging_utils import get_logger
from .base import UnavailableUserStore, UserStore
from .memory_store import InMemoryUserStore
from .mongo_store import MongoUserStore

LOGGER = get_logger(__name__)


def create_user_store(settings: FinvaultSettings) -> UserStore:
    """Instantiate the store backend named by ``settings.store_backend``.

    A backend that cannot even be constructed is logged and replaced by an
    ``UnavailableUserStore`` instead of stopping the process.
    """

    if settings.store_backend == "mongodb":
        try:
            return MongoUserStore.from_settings(settings)
        except InternalError:
            LOGGER.exception("Store connection error (mongodb backend)")
            return UnavailableUserStore(settings.store_backend)
    if settings.store_backend == "memory":
        return InMemoryUserStore()
    raise ValueError(f"Unknown store backend '{settings.store_backend}'")


__all__ = [
    "InMemoryUserStore",
    "MongoUserStore",
    "UnavailableUserStore",
    "UserStore",
    "create_user_store",
]
