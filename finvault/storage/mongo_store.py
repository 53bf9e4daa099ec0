"""Mini README: MongoDB-backed user store built on pymongo.

Structure:
    * MongoUserStore - wraps a ``users`` collection; one document per user
      with the finance entries embedded as an array.

The client is created lazily by pymongo, so constructing the store never
blocks. Connectivity problems surface on the first operation (or on
``ping``) and are reported as ``InternalError`` so the web layer answers 500.
"""

from __future__ import annotations

from typing import Optional

from bson import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..configuration import FinvaultSettings
from ..errors import ConflictError, InternalError, NotFoundError
from ..logging_utils import get_logger
from ..models import UserRecord
from .base import UserStore

LOGGER = get_logger(__name__)


class MongoUserStore(UserStore):
    """User store persisting whole user documents in MongoDB."""

    backend_name = "mongodb"

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def from_settings(cls, settings: FinvaultSettings) -> "MongoUserStore":
        """Build a client and collection handle from configuration.

        Raises ``InternalError`` when pymongo rejects the URI up front.
        """

        try:
            client: MongoClient = MongoClient(
                settings.mongo_uri,
                serverSelectionTimeoutMS=settings.store_timeout_ms,
            )
        except PyMongoError as error:
            # mongodb+srv URIs resolve DNS eagerly and can fail here.
            raise InternalError() from error
        collection = client[settings.database_name][settings.users_collection]
        LOGGER.info(
            "Configured MongoDB store database=%s collection=%s",
            settings.database_name,
            settings.users_collection,
        )
        return cls(collection, client=client)

    def ping(self) -> None:
        if self._client is None:
            return
        try:
            self._client.admin.command("ping")
        except PyMongoError as error:
            raise InternalError() from error

    def ensure_indexes(self) -> None:
        try:
            self._collection.create_index([("username", ASCENDING)], unique=True)
        except PyMongoError as error:
            raise InternalError() from error

    def find_user(self, username: str) -> Optional[UserRecord]:
        try:
            document = self._collection.find_one({"username": username})
        except PyMongoError as error:
            LOGGER.exception("Failed to load user %s", username)
            raise InternalError() from error
        if document is None:
            return None
        return UserRecord.from_document(document)

    def insert_user(self, record: UserRecord) -> None:
        try:
            self._collection.insert_one(record.to_document())
        except DuplicateKeyError as error:
            raise ConflictError("Username is already taken.") from error
        except PyMongoError as error:
            LOGGER.exception("Failed to insert user %s", record.username)
            raise InternalError() from error

    def save_user(self, record: UserRecord) -> None:
        try:
            result = self._collection.replace_one(
                {"_id": ObjectId(record.user_id)}, record.to_document()
            )
        except PyMongoError as error:
            LOGGER.exception("Failed to save user %s", record.username)
            raise InternalError() from error
        if result.matched_count == 0:
            raise NotFoundError("User not found.")

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            LOGGER.debug("Closed MongoDB client")
