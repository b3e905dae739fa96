"""Conversion of record collections into pandas frames.

The analytics, filter and chart helpers all work on the same tabular
shape.  Row ``i`` of the frame is element ``i`` of the input sequence, so
filtered frames can be mapped back to the original record objects via
their index.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

try:
    from .models import TransactionRecord
except ImportError:
    from models import TransactionRecord

FRAME_COLUMNS = [
    'id', 'Description', 'Amount', 'Date', 'Category', 'Sub Category',
    'Type', 'Note', 'Recurrent', 'Status', 'Last Edited',
]


def records_to_frame(records: Sequence[TransactionRecord]) -> pd.DataFrame:
    """Build a frame with one row per record, indexed by position."""
    rows = [
        {
            'id': r.id,
            'Description': r.description,
            'Amount': float(r.amount),
            'Date': r.date,
            'Category': r.category,
            'Sub Category': r.sub_category,
            'Type': getattr(r.type, 'value', r.type),
            'Note': r.note,
            'Recurrent': bool(r.recurrent),
            'Status': getattr(r.status, 'value', r.status),
            'Last Edited': r.last_edited,
        }
        for r in records
    ]
    data = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    data['Amount'] = pd.to_numeric(data['Amount'], errors='coerce').fillna(0.0).astype(float)
    data['Flow'] = np.where(data['Amount'] < 0, 'expense', 'income')
    data['Transaction Date'] = pd.to_datetime(data['Date'], format='%Y-%m-%d', errors='coerce')
    data['Year'] = data['Transaction Date'].dt.year
    data['Month'] = data['Transaction Date'].dt.month
    return data


def frame_to_records(frame: pd.DataFrame, records: Sequence[TransactionRecord]) -> list:
    """Map the rows still present in ``frame`` back to the source records."""
    return [records[int(i)] for i in frame.index]
