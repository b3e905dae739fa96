"""Record builders shared by the test modules."""

from __future__ import annotations

from finance_tracker.models import TransactionRecord, TransactionStatus, TransactionType


def make_record(id, amount, date, category=None, description=None, note="", recurrent=False,
                status="Cleared", sub_category=""):
    txn_type = TransactionType.EXPENSE if amount < 0 else TransactionType.INCOME
    if category is None:
        category = "Food" if amount < 0 else "Salary"
    return TransactionRecord(
        id=id,
        description=description or f"Txn {id}",
        amount=float(amount),
        date=date,
        category=category,
        type=txn_type,
        sub_category=sub_category,
        note=note,
        recurrent=recurrent,
        status=TransactionStatus(status),
        last_edited=0,
    )
