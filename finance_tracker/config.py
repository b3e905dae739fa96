"""Configuration management for the finance tracker.

This module centralizes all configuration values including paths,
category sets, display defaults and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Tuple

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def get_data_dir() -> Path:
    """Return the data directory, honouring ``FINTRACK_DATA_DIR``."""
    return Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))


def get_store_path() -> Path:
    """Return the JSON record store path, honouring ``FINTRACK_STORE_PATH``."""
    override = os.getenv("FINTRACK_STORE_PATH")
    if override:
        return Path(override).resolve()
    return (get_data_dir() / "transactions.json").resolve()


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    get_data_dir().mkdir(parents=True, exist_ok=True)


# Categories are partitioned by transaction type
EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Transport",
    "Bills",
    "Shopping",
    "Entertainment",
    "Health",
    "Other Expense",
)
INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Investment",
    "Gift",
    "Bonus",
    "Other Income",
)
ALL_CATEGORIES: Tuple[str, ...] = EXPENSE_CATEGORIES + INCOME_CATEGORIES

# Display-only currency symbols
CURRENCIES: Dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
}
DEFAULT_CURRENCY = os.getenv("FINTRACK_CURRENCY", "INR")
if DEFAULT_CURRENCY not in CURRENCIES:
    DEFAULT_CURRENCY = "INR"

DEFAULT_USER_NAME = "Jane Doe"

TOP_CATEGORY_LIMIT = 5
RECENT_TRANSACTION_LIMIT = 10

DEFAULT_GOAL: Dict[str, object] = {
    "name": "Travel Fund",
    "target": 50000.0,
    "saved": 15000.0,
}

# Colours shared by the chart helpers
INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"
CATEGORY_COLORS: List[str] = [
    "#1e3a8a",
    "#059669",
    "#f97316",
    "#3b82f6",
    "#f43f5e",
    "#6366f1",
    "#84cc16",
]

# Initial collection used when the store has never been written
SEED_TRANSACTIONS: List[Dict[str, object]] = [
    {
        "id": 1, "description": "Groceries", "amount": -500.0, "date": "2025-10-25",
        "category": "Food", "type": "expense", "note": "Weekly shopping",
        "recurrent": False, "status": "Cleared", "subCategory": "Necessity",
    },
    {
        "id": 2, "description": "Salary", "amount": 30000.0, "date": "2025-10-30",
        "category": "Salary", "type": "income", "note": "Monthly pay",
        "recurrent": True, "status": "Cleared", "subCategory": "",
    },
    {
        "id": 3, "description": "New Gadget", "amount": -1500.0, "date": "2025-11-01",
        "category": "Shopping", "type": "expense", "note": "Smartwatch purchase",
        "recurrent": False, "status": "Pending", "subCategory": "Luxury",
    },
    {
        "id": 4, "description": "Rent", "amount": -12000.0, "date": "2025-10-01",
        "category": "Bills", "type": "expense", "note": "Monthly rent",
        "recurrent": True, "status": "Cleared", "subCategory": "Necessity",
    },
    {
        "id": 5, "description": "Freelance", "amount": 5000.0, "date": "2025-11-05",
        "category": "Investment", "type": "income", "note": "",
        "recurrent": False, "status": "Cleared", "subCategory": "",
    },
]
