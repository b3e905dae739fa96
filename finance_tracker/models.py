"""Domain records for the finance tracker.

Transactions and the savings goal are immutable values.  Collections of
them are passed to the analytics helpers as plain sequences and every
change produces a new collection instead of mutating one in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

try:
    from .config import EXPENSE_CATEGORIES, INCOME_CATEGORIES
except ImportError:
    from config import EXPENSE_CATEGORIES, INCOME_CATEGORIES

INFINITE = "Infinite"
NOT_AVAILABLE = "N/A"


class ValidationError(ValueError):
    """Raised when a transaction draft cannot be turned into a record."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"

    @property
    def categories(self) -> tuple:
        return EXPENSE_CATEGORIES if self is TransactionType.EXPENSE else INCOME_CATEGORIES


class TransactionStatus(str, Enum):
    CLEARED = "Cleared"
    PENDING = "Pending"


class SortKey(str, Enum):
    DATE_DESC = "dateDesc"
    DATE_ASC = "dateAsc"
    AMOUNT_DESC = "amountDesc"
    AMOUNT_ASC = "amountAsc"


@dataclass(frozen=True)
class TransactionRecord:
    id: int
    description: str
    amount: float           # + for income, - for expense
    date: str               # YYYY-MM-DD
    category: str
    type: TransactionType
    sub_category: str = ""
    note: str = ""
    recurrent: bool = False
    status: TransactionStatus = TransactionStatus.CLEARED
    last_edited: int = 0    # epoch milliseconds

    def derived_type(self) -> TransactionType:
        """Type implied by the sign of ``amount``."""
        return TransactionType.EXPENSE if self.amount < 0 else TransactionType.INCOME

    def is_consistent(self) -> bool:
        """True when amount, type and category agree with each other."""
        if self.amount == 0:
            return False
        if self.derived_type() is not TransactionType(self.type):
            return False
        return self.category in TransactionType(self.type).categories

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
            "category": self.category,
            "subCategory": self.sub_category,
            "type": TransactionType(self.type).value,
            "note": self.note,
            "recurrent": self.recurrent,
            "status": TransactionStatus(self.status).value,
            "lastEdited": self.last_edited,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransactionRecord":
        """Build a record from its persisted form.

        Older exports stored the description under ``text``; both keys are
        accepted.  A missing ``type`` is derived from the amount sign.
        """
        amount = float(data["amount"])
        raw_type = data.get("type") or ("expense" if amount < 0 else "income")
        return cls(
            id=int(data["id"]),
            description=str(data.get("description", data.get("text", ""))),
            amount=amount,
            date=str(data["date"])[:10],
            category=str(data.get("category", "")),
            type=TransactionType(raw_type),
            sub_category=str(data.get("subCategory") or ""),
            note=str(data.get("note") or ""),
            recurrent=bool(data.get("recurrent", False)),
            status=TransactionStatus(data.get("status") or TransactionStatus.CLEARED.value),
            last_edited=int(data.get("lastEdited") or 0),
        )


@dataclass(frozen=True)
class Goal:
    name: str
    target: float
    saved: float = 0.0

    @property
    def contribution_tag(self) -> str:
        """Note substring that marks an expense as a contribution to this goal."""
        return f"Goal: {self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "target": self.target, "saved": self.saved}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            name=str(data.get("name", "")),
            target=float(data.get("target") or 0.0),
            saved=float(data.get("saved") or 0.0),
        )


@dataclass(frozen=True)
class CategorySelector:
    """Which slice of the collection the category dropdown selects.

    ``kind`` is one of ``all``, ``status``, ``recurring`` or ``category``;
    ``value`` carries the status or category name for the last two.
    """

    kind: str = "all"
    value: Optional[str] = None

    @classmethod
    def all(cls) -> "CategorySelector":
        return cls("all")

    @classmethod
    def status(cls, value: str) -> "CategorySelector":
        return cls("status", value)

    @classmethod
    def recurring(cls) -> "CategorySelector":
        return cls("recurring")

    @classmethod
    def category(cls, value: str) -> "CategorySelector":
        return cls("category", value)


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    type: str = "all"
    category: CategorySelector = field(default_factory=CategorySelector.all)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    sort_key: str = SortKey.DATE_DESC.value
