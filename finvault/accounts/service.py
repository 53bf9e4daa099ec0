"""Mini README: Account registration and login.

Structure:
    * AccountService - registers credential records and issues access tokens.

Login failures deliberately share one message whether the username is
unknown or the password is wrong, so responses cannot be used to discover
which usernames exist.
"""

from __future__ import annotations

from typing import Optional

from ..errors import ConflictError, InvalidCredentialsError, ValidationError
from ..logging_utils import get_logger
from ..models import UserRecord
from ..storage import UserStore
from .security import PasswordHasher, TokenIssuer

LOGGER = get_logger(__name__)

REGISTERED_MESSAGE = "User registered successfully!"
LOGIN_MESSAGE = "Login successful!"
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."


def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
    if not username or not password:
        raise ValidationError("Username and password are required.")


class AccountService:
    """Create accounts and authenticate them against stored hashes."""

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenIssuer) -> None:
        self._store = store
        self._hasher = hasher
        self._tokens = tokens

    def register(self, username: Optional[str], password: Optional[str]) -> str:
        """Persist a new user with no finance entries and return the acknowledgement."""

        _require_credentials(username, password)
        if self._store.find_user(username) is not None:
            raise ConflictError("Username is already taken.")

        record = UserRecord.new(username, self._hasher.hash(password))
        self._store.insert_user(record)
        LOGGER.info("Registered user %s", username)
        return REGISTERED_MESSAGE

    def authenticate(self, username: Optional[str], password: Optional[str]) -> str:
        """Return a signed access token when the credentials match."""

        _require_credentials(username, password)
        record = self._store.find_user(username)
        if record is None or not self._hasher.verify(password, record.password_hash):
            LOGGER.info("Rejected login for %s", username)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        token = self._tokens.issue(record.user_id, record.username)
        LOGGER.info("Issued access token for %s", username)
        return token
