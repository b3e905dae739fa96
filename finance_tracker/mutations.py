"""Create, edit and delete operations on the transaction collection.

Every operation takes the current collection and returns a new one; the
caller hands the result to :meth:`RecordStore.replace`.  Drafts are
validated before anything is built, so a rejected draft leaves the
collection exactly as it was.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import AbstractSet, FrozenSet, List, Optional, Sequence, Tuple, Union

try:
    from .clock import SystemClock, resolve_clock
    from .logging_setup import get_logger
    from .notifications import LoggingNotifier
    from .models import TransactionRecord, TransactionStatus, TransactionType, ValidationError
except ImportError:
    from clock import SystemClock, resolve_clock
    from logging_setup import get_logger
    from notifications import LoggingNotifier
    from models import TransactionRecord, TransactionStatus, TransactionType, ValidationError

logger = get_logger("finance_tracker.mutations")

MISSING_FIELDS_MESSAGE = "Please enter a description and a valid positive amount."


@dataclass(frozen=True)
class TransactionDraft:
    """Raw values captured by the add/edit form."""

    description: str
    amount: Union[str, float, int]
    type: str = TransactionType.EXPENSE.value
    category: str = "Food"
    date: Union[str, date] = ""
    note: str = ""
    sub_category: str = ""
    recurrent: bool = False
    status: str = TransactionStatus.CLEARED.value


def _parse_amount(value: Union[str, float, int, None]) -> float:
    if value is None or isinstance(value, bool):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(MISSING_FIELDS_MESSAGE) from None
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    return amount


def _parse_date(value: Union[str, date], clock: SystemClock) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value or "").strip()
    if not text:
        return clock.today().isoformat()
    try:
        return datetime.strptime(text, "%Y-%m-%d").date().isoformat()
    except ValueError:
        raise ValidationError(f"Invalid date '{text}', expected YYYY-MM-DD.") from None


def validate_draft(draft: TransactionDraft, clock: Optional[SystemClock] = None) -> Tuple[float, TransactionType, str]:
    """Check a draft and return its (magnitude, type, ISO date).

    Raises:
        ValidationError: empty description, missing, non-numeric or
            non-positive amount, unknown type, a category that doesn't
            belong to the type, or an unparseable date. An empty date means today.
    """
    if not (draft.description or "").strip():
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    magnitude = _parse_amount(draft.amount)

    try:
        txn_type = TransactionType(draft.type)
    except ValueError:
        raise ValidationError(f"Unknown transaction type '{draft.type}'.") from None
    if draft.category not in txn_type.categories:
        raise ValidationError(f"Category '{draft.category}' is not a valid {txn_type.value} category.")

    try:
        TransactionStatus(draft.status)
    except ValueError:
        raise ValidationError(f"Unknown status '{draft.status}'.") from None

    return magnitude, txn_type, _parse_date(draft.date, resolve_clock(clock))


def next_transaction_id(records: Sequence[TransactionRecord], clock: SystemClock) -> int:
    """Timestamp-derived id, bumped past any id already in use."""
    candidate = clock.timestamp_ms()
    if records:
        candidate = max(candidate, max(r.id for r in records) + 1)
    return candidate


def add_or_update(
    records: Sequence[TransactionRecord],
    draft: TransactionDraft,
    *,
    edit_id: Optional[int] = None,
    clock: Optional[SystemClock] = None,
) -> List[TransactionRecord]:
    """Return a new collection with ``draft`` added, or replacing ``edit_id``.

    An edit keeps the record's id and position.  When ``edit_id`` is not in
    the collection the draft is appended as a new record.
    """
    clock = resolve_clock(clock)
    magnitude, txn_type, iso_date = validate_draft(draft, clock)
    amount = -magnitude if txn_type is TransactionType.EXPENSE else magnitude

    editing = edit_id is not None and any(r.id == edit_id for r in records)
    record = TransactionRecord(
        id=edit_id if editing else next_transaction_id(records, clock),
        description=draft.description.strip(),
        amount=amount,
        date=iso_date,
        category=draft.category,
        type=txn_type,
        sub_category=(draft.sub_category or "").strip(),
        note=draft.note or "",
        recurrent=bool(draft.recurrent),
        status=TransactionStatus(draft.status),
        last_edited=clock.timestamp_ms(),
    )

    if editing:
        logger.info("Updated transaction %s", record.id)
        return [record if r.id == edit_id else r for r in records]
    logger.info("Added transaction %s", record.id)
    return list(records) + [record]


def delete_transaction(records: Sequence[TransactionRecord], record_id: int) -> List[TransactionRecord]:
    """Drop the record with ``record_id``; unknown ids leave the collection as is."""
    remaining = [r for r in records if r.id != record_id]
    if len(remaining) != len(records):
        logger.info("Deleted transaction %s", record_id)
    return remaining


def toggle_selection(selected_ids: AbstractSet[int], record_id: int) -> FrozenSet[int]:
    if record_id in selected_ids:
        return frozenset(selected_ids - {record_id})
    return frozenset(selected_ids | {record_id})


def bulk_delete(
    records: Sequence[TransactionRecord],
    selected_ids: AbstractSet[int],
) -> Tuple[List[TransactionRecord], FrozenSet[int]]:
    """Remove every selected record and return the cleared selection."""
    remaining = [r for r in records if r.id not in selected_ids]
    logger.info("Bulk deleted %d transactions", len(records) - len(remaining))
    return remaining, frozenset()


def submit_draft(store, draft: TransactionDraft, notifier=None, *, edit_id: Optional[int] = None,
                 clock: Optional[SystemClock] = None) -> bool:
    """Validate and apply a draft against ``store``.

    On a :class:`ValidationError` the message goes to ``notifier`` (the
    package log when none is given) and the stored collection is left
    untouched.
    """
    if notifier is None:
        notifier = LoggingNotifier()
    try:
        updated = add_or_update(store.load(), draft, edit_id=edit_id, clock=clock)
    except ValidationError as exc:
        notifier.notify(exc.message)
        return False
    store.replace(updated)
    return True
