"""Mini README: Error taxonomy shared by the Finvault services.

Structure:
    * FinvaultError - base class carrying a client-facing message and status.
    * ValidationError, ConflictError, NotFoundError, InvalidCredentialsError -
      request problems reported to the caller as HTTP 400.
    * InternalError - store failures and unexpected exceptions (HTTP 500).
    * InvalidTokenError - raised when downstream consumers decode a bad token.

Services raise these exceptions; the web layer converts them into
``{"error": message}`` JSON responses.
"""

from __future__ import annotations

INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."


class FinvaultError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FinvaultError):
    """A required field is missing or malformed."""


class ConflictError(FinvaultError):
    """The username or month is already present."""


class NotFoundError(FinvaultError):
    """The user, or the month entry being updated, does not exist."""


class InvalidCredentialsError(FinvaultError):
    """Login failed; unknown user and wrong password are indistinguishable."""


class InternalError(FinvaultError):
    """The store failed or an unexpected exception occurred."""

    status_code = 500

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)


class InvalidTokenError(FinvaultError):
    status_code = 401
