"""Mini README: Finance record utilities for Finvault.

The ``service`` module stores one income/expenses/savings entry per month
inside each user's document and applies the savings derivation rules.
"""

from .service import FinanceRecordService, resolve_savings, resolve_updated_savings

__all__ = ["FinanceRecordService", "resolve_savings", "resolve_updated_savings"]
