"""Mini README: Account subsystem for Finvault.

``security`` holds the bcrypt and JWT wrappers; ``service`` exposes the
registration and login operations used by the web interface.
"""

from .security import PasswordHasher, TokenIssuer
from .service import AccountService

__all__ = ["AccountService", "PasswordHasher", "TokenIssuer"]
