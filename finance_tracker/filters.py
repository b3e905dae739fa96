"""Filtering and sorting of the visible transaction list.

``filter_transactions`` narrows a record collection with the criteria the
transactions page exposes (search text, type, category/status/recurrence
selector, date range) and orders the result.  The input collection is
never modified; the returned list holds the same record objects.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import pandas as pd

try:
    from .config import ALL_CATEGORIES
    from .frames import frame_to_records, records_to_frame
    from .models import CategorySelector, FilterCriteria, SortKey, TransactionRecord, TransactionStatus
except ImportError:
    from config import ALL_CATEGORIES
    from frames import frame_to_records, records_to_frame
    from models import CategorySelector, FilterCriteria, SortKey, TransactionRecord, TransactionStatus

STATUS_PREFIX = "status:"
RECURRING_OPTION = "recurring"

# (label, raw selector) pairs in dropdown order
CATEGORY_SELECTOR_OPTIONS: List[Tuple[str, str]] = (
    [("Filter by Category/Status/Recurrence", "all")]
    + [(f"Status: {s.value}", f"{STATUS_PREFIX}{s.value}") for s in TransactionStatus]
    + [("Recurring", RECURRING_OPTION)]
    + [(c, c) for c in ALL_CATEGORIES]
)

SORT_OPTIONS = {
    SortKey.DATE_DESC.value: "Newest First",
    SortKey.DATE_ASC.value: "Oldest First",
    SortKey.AMOUNT_DESC.value: "Amount High-Low",
    SortKey.AMOUNT_ASC.value: "Amount Low-High",
}


def parse_category_selector(raw: str | None) -> CategorySelector:
    """Turn the dropdown string into a :class:`CategorySelector`."""
    text = (raw or "").strip()
    if not text or text == "all":
        return CategorySelector.all()
    if text.startswith(STATUS_PREFIX):
        return CategorySelector.status(text[len(STATUS_PREFIX):])
    if text == RECURRING_OPTION:
        return CategorySelector.recurring()
    return CategorySelector.category(text)


def _apply_search(data: pd.DataFrame, search_term: str) -> pd.DataFrame:
    needle = search_term.lower()
    combined_mask = pd.Series(False, index=data.index)
    for col in ['Description', 'Note', 'Category']:
        combined_mask = combined_mask | data[col].astype(str).str.lower().str.contains(needle, regex=False, na=False)
    return data[combined_mask]


def _apply_selector(data: pd.DataFrame, selector: CategorySelector) -> pd.DataFrame:
    if selector.kind == "status":
        return data[data['Status'] == selector.value]
    if selector.kind == "recurring":
        return data[data['Recurrent'].astype(bool)]
    if selector.kind == "category":
        return data[data['Category'] == selector.value]
    return data


def _apply_sort(data: pd.DataFrame, sort_key: str) -> pd.DataFrame:
    if sort_key in (SortKey.DATE_DESC.value, SortKey.DATE_ASC.value):
        return data.sort_values(
            'Transaction Date',
            ascending=sort_key == SortKey.DATE_ASC.value,
            kind='mergesort',
            na_position='last',
        )
    if sort_key in (SortKey.AMOUNT_DESC.value, SortKey.AMOUNT_ASC.value):
        magnitude = data['Amount'].abs()
        order = magnitude.sort_values(ascending=sort_key == SortKey.AMOUNT_ASC.value, kind='mergesort')
        return data.loc[order.index]
    return data


def filter_transactions(
    records: Sequence[TransactionRecord],
    criteria: FilterCriteria,
) -> List[TransactionRecord]:
    """Return the records matching every active criterion, in sort order."""
    if not records:
        return []
    data = records_to_frame(records)

    if criteria.search_term:
        data = _apply_search(data, criteria.search_term)

    if criteria.type and criteria.type != "all":
        data = data[data['Type'] == getattr(criteria.type, 'value', criteria.type)]

    data = _apply_selector(data, criteria.category)

    if criteria.start_date and criteria.end_date:
        start, end = str(criteria.start_date)[:10], str(criteria.end_date)[:10]
        data = data[(data['Date'] >= start) & (data['Date'] <= end)]

    data = _apply_sort(data, getattr(criteria.sort_key, 'value', criteria.sort_key))
    return frame_to_records(data, records)
