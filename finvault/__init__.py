"""Mini README: Core package initializer for the Finvault backend.

Finvault registers accounts, issues access tokens, and keeps monthly
income/expense/savings records per user in a document store. Subpackages:
``accounts`` (registration and login), ``finance`` (entry CRUD),
``storage`` (user store backends), and ``interface`` (FastAPI app).
"""

from .logging_utils import get_logger

__version__ = "1.0.0"

__all__ = ["get_logger", "__version__"]
