"""Mini README: Domain records persisted by Finvault.

Structure:
    * FinanceEntry - one month's income, expenses, and savings figures.
    * UserRecord - account credentials plus the embedded entry sequence.

A user document owns its entries outright: entries have no identity of their
own and are always stored, loaded, and replaced together with the user. The
sequence keeps arrival order and is never sorted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId

Number = Union[int, float]


@dataclass(slots=True)
class FinanceEntry:
    """Monthly income/expense record embedded in a user document."""

    month: str
    income: Number
    expenses: Number
    savings: Number

    def as_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "income": self.income,
            "expenses": self.expenses,
            "savings": self.savings,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FinanceEntry":
        return cls(
            month=payload["month"],
            income=payload["income"],
            expenses=payload["expenses"],
            savings=payload["savings"],
        )


@dataclass(slots=True)
class UserRecord:
    """Registered account with its finance entries."""

    user_id: str
    username: str
    password_hash: str
    finance_entries: List[FinanceEntry] = field(default_factory=list)

    @classmethod
    def new(cls, username: str, password_hash: str) -> "UserRecord":
        """Build a freshly registered user with a new identifier and no entries."""

        return cls(user_id=str(ObjectId()), username=username, password_hash=password_hash)

    def find_entry(self, month: str) -> Optional[FinanceEntry]:
        for entry in self.finance_entries:
            if entry.month == month:
                return entry
        return None

    def to_document(self) -> Dict[str, Any]:
        """Export the user in the shape stored by the document database."""

        return {
            "_id": ObjectId(self.user_id),
            "username": self.username,
            "password_hash": self.password_hash,
            "finance_entries": [entry.as_dict() for entry in self.finance_entries],
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserRecord":
        return cls(
            user_id=str(document["_id"]),
            username=document["username"],
            password_hash=document["password_hash"],
            finance_entries=[
                FinanceEntry.from_dict(item) for item in document.get("finance_entries", [])
            ],
        )
