"""Mini README: Password hashing and access-token primitives.

Structure:
    * PasswordHasher - salted bcrypt hashing with a fixed work factor.
    * TokenIssuer - signs and verifies time-limited JWT access tokens.

Both classes are thin wrappers so the account service can be constructed
with cheap settings in tests (low bcrypt rounds, short token lifetimes).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from ..errors import InvalidTokenError

# bcrypt ignores (or, in newer releases, rejects) input beyond this length.
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class PasswordHasher:
    """One-way salted password hashing backed by bcrypt."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode_password(password), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return ``True`` when ``password`` matches; malformed hashes never match."""

        try:
            return bcrypt.checkpw(_encode_password(password), hashed_password.encode("utf-8"))
        except ValueError:
            return False


class TokenIssuer:
    """Issue signed access tokens carrying the user id and username."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(
        self,
        user_id: str,
        username: str,
        *,
        issued_at: Optional[datetime] = None,
    ) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        claims = {
            "user_id": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify signature and expiry, returning the token claims.

        The HTTP handlers only issue tokens; this is for downstream
        consumers that need to authenticate requests.
        """

        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as error:
            raise InvalidTokenError("Invalid or expired token.") from error
