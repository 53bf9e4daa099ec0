"""Mini README: Monthly finance entries stored per user.

Structure:
    * resolve_savings - savings rule applied when an entry is added.
    * resolve_updated_savings - savings rule applied when an entry is updated.
    * FinanceRecordService - add, list, update, and delete entries.

Each operation loads the whole user document, changes it in memory, and
saves it back. A user holds at most one entry per month label; entries keep
the order in which they were added.
"""

from __future__ import annotations

from typing import List, Optional

from ..errors import ConflictError, NotFoundError, ValidationError
from ..logging_utils import get_logger
from ..models import FinanceEntry, Number, UserRecord
from ..storage import UserStore

LOGGER = get_logger(__name__)

ENTRY_FIELDS_REQUIRED = "All fields are required except savings."


def resolve_savings(income: Number, expenses: Number, savings: Optional[Number]) -> Number:
    """Use the caller's savings unless it is absent or zero."""

    if savings is None or savings == 0:
        return income - expenses
    return savings


def resolve_updated_savings(
    current: FinanceEntry,
    income: Number,
    expenses: Number,
    savings: Optional[Number],
) -> Number:
    """Like ``resolve_savings`` but a changed income or expense always recomputes.

    A nonzero savings value supplied alongside unchanged figures is kept as
    given, even when it disagrees with ``income - expenses``.
    """

    if current.income != income or current.expenses != expenses:
        return income - expenses
    return resolve_savings(income, expenses, savings)


def _require_entry_fields(
    username: Optional[str],
    month: Optional[str],
    income: Optional[Number],
    expenses: Optional[Number],
) -> None:
    if not username or not month or income is None or expenses is None:
        raise ValidationError(ENTRY_FIELDS_REQUIRED)


class FinanceRecordService:
    """CRUD operations over the finance entries embedded in user documents."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def _load_user(self, username: str) -> UserRecord:
        record = self._store.find_user(username)
        if record is None:
            raise NotFoundError("User not found.")
        return record

    def add_entry(
        self,
        username: Optional[str],
        month: Optional[str],
        income: Optional[Number],
        expenses: Optional[Number],
        savings: Optional[Number] = None,
    ) -> FinanceEntry:
        _require_entry_fields(username, month, income, expenses)
        record = self._load_user(username)
        if record.find_entry(month) is not None:
            raise ConflictError("Data for this month already exists.")

        entry = FinanceEntry(
            month=month,
            income=income,
            expenses=expenses,
            savings=resolve_savings(income, expenses, savings),
        )
        record.finance_entries.append(entry)
        self._store.save_user(record)
        LOGGER.info("Added finance entry user=%s month=%s", username, month)
        return entry

    def get_entries(self, username: Optional[str]) -> List[FinanceEntry]:
        """Return every entry for ``username`` in stored order."""

        if not username:
            raise ValidationError("Username is required.")
        record = self._load_user(username)
        LOGGER.debug("Loaded %s finance entries for %s", len(record.finance_entries), username)
        return list(record.finance_entries)

    def update_entry(
        self,
        username: Optional[str],
        month: Optional[str],
        income: Optional[Number],
        expenses: Optional[Number],
        savings: Optional[Number] = None,
    ) -> FinanceEntry:
        _require_entry_fields(username, month, income, expenses)
        record = self._load_user(username)
        entry = record.find_entry(month)
        if entry is None:
            raise NotFoundError("Data for this month not found.")

        entry.savings = resolve_updated_savings(entry, income, expenses, savings)
        entry.income = income
        entry.expenses = expenses
        self._store.save_user(record)
        LOGGER.info("Updated finance entry user=%s month=%s", username, month)
        return entry

    def delete_entry(self, username: Optional[str], month: Optional[str]) -> int:
        """Remove entries for ``month``; a month that is not present is not an error."""

        if not username or not month:
            raise ValidationError("Username and month are required.")
        record = self._load_user(username)
        remaining = [entry for entry in record.finance_entries if entry.month != month]
        removed = len(record.finance_entries) - len(remaining)
        record.finance_entries = remaining
        self._store.save_user(record)
        LOGGER.info("Deleted %s finance entries user=%s month=%s", removed, username, month)
        return removed
