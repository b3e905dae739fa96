"""JSON-backed record store for transactions, the savings goal and settings.

The store is a dumb holder: it hands out the current collection and
adopts replacement collections wholesale.  Validation happens before a
collection reaches :meth:`RecordStore.replace`.
"""

from __future__ import annotations

import json
import os
import shutil
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

try:
    from .config import (
        CURRENCIES,
        DEFAULT_CURRENCY,
        DEFAULT_GOAL,
        DEFAULT_USER_NAME,
        SEED_TRANSACTIONS,
        get_store_path,
    )
    from .logging_setup import get_logger
    from .models import Goal, TransactionRecord
except ImportError:
    from config import (
        CURRENCIES,
        DEFAULT_CURRENCY,
        DEFAULT_GOAL,
        DEFAULT_USER_NAME,
        SEED_TRANSACTIONS,
        get_store_path,
    )
    from logging_setup import get_logger
    from models import Goal, TransactionRecord

logger = get_logger("finance_tracker.store")

DEFAULT_SETTINGS: Dict[str, Any] = {
    'currency': DEFAULT_CURRENCY,
    'user_name': DEFAULT_USER_NAME,
}


def _parse_records(raw: Iterable[Dict[str, Any]]) -> Tuple[TransactionRecord, ...]:
    return tuple(TransactionRecord.from_dict(item) for item in raw)


def _parse_valid_records(raw: Iterable[Any]) -> Tuple[Tuple[TransactionRecord, ...], int]:
    """Parse the well-formed rows and count the ones that had to be skipped."""
    records = []
    skipped = 0
    for item in raw:
        try:
            records.append(TransactionRecord.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed stored transaction %r: %s", item, exc)
            skipped += 1
    return tuple(records), skipped


class RecordStore:
    """Holds the current transaction collection and persists it to disk."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else get_store_path()
        self._lock = threading.Lock()
        self._records: Optional[Tuple[TransactionRecord, ...]] = None

    @property
    def corrupt_path(self) -> Path:
        """Where an unreadable store file is kept before defaults take over."""
        return self.path.with_suffix(self.path.suffix + '.corrupt')

    def _read_payload(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except OSError as exc:
            logger.warning("Could not read %s, using defaults: %s", self.path, exc)
            return {}
        except json.JSONDecodeError as exc:
            logger.warning("%s is not valid JSON, moved to %s: %s", self.path, self.corrupt_path, exc)
            os.replace(self.path, self.corrupt_path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Unexpected payload type in %s, moved to %s", self.path, self.corrupt_path)
            os.replace(self.path, self.corrupt_path)
            return {}
        return data

    def _write_payload(self, payload: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with tmp_path.open('w', encoding='utf-8') as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def _update_payload(self, key: str, value: Any) -> None:
        payload = self._read_payload()
        payload[key] = value
        self._write_payload(payload)

    def load(self) -> Tuple[TransactionRecord, ...]:
        """Return the current collection, loading it from disk on first use."""
        with self._lock:
            if self._records is None:
                payload = self._read_payload()
                raw = payload.get('transactions')
                if raw is not None and not isinstance(raw, list):
                    shutil.copyfile(self.path, self.corrupt_path)
                    logger.warning("Stored transactions are not a list, using seed data; original copied to %s",
                                   self.corrupt_path)
                if not isinstance(raw, list):
                    raw = SEED_TRANSACTIONS
                self._records, skipped = _parse_valid_records(raw)
                if skipped:
                    shutil.copyfile(self.path, self.corrupt_path)
                    logger.warning("Skipped %d malformed transactions, original file copied to %s",
                                   skipped, self.corrupt_path)
            return self._records

    def replace(self, records: Iterable[TransactionRecord]) -> None:
        """Adopt ``records`` as the new collection and persist it."""
        new_records = tuple(records)
        with self._lock:
            self._update_payload('transactions', [r.to_dict() for r in new_records])
            self._records = new_records
        logger.info("Stored %d transactions", len(new_records))

    def reset(self) -> None:
        """Drop every transaction."""
        self.replace(())

    def load_goal(self) -> Goal:
        raw = self._read_payload().get('goal')
        if not isinstance(raw, dict):
            raw = DEFAULT_GOAL
        try:
            return Goal.from_dict(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("Stored goal is malformed, using default goal: %s", exc)
            return Goal.from_dict(DEFAULT_GOAL)

    def save_goal(self, goal: Goal) -> None:
        with self._lock:
            self._update_payload('goal', goal.to_dict())

    def load_settings(self) -> Dict[str, Any]:
        settings = DEFAULT_SETTINGS.copy()
        raw = self._read_payload().get('settings')
        if isinstance(raw, dict):
            settings.update({k: v for k, v in raw.items() if k in DEFAULT_SETTINGS})
        if settings['currency'] not in CURRENCIES:
            settings['currency'] = DEFAULT_CURRENCY
        return settings

    def save_settings(self, settings: Dict[str, Any]) -> None:
        cleaned = {k: v for k, v in settings.items() if k in DEFAULT_SETTINGS}
        with self._lock:
            self._update_payload('settings', cleaned)

    def export_json(self) -> str:
        """Serialize transactions and goal for download."""
        payload = {
            'transactions': [r.to_dict() for r in self.load()],
            'goal': self.load_goal().to_dict(),
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> int:
        """Replace the collection (and goal, when present) from an export.

        Accepts either the export object or a bare list of transactions.
        Raises ``ValueError`` when the text cannot be parsed.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Import file is not valid JSON: {exc}") from exc

        raw_goal = None
        if isinstance(data, dict):
            raw_goal = data.get('goal')
            data = data.get('transactions')
        if not isinstance(data, list):
            raise ValueError("Import file must contain a list of transactions")

        try:
            records = _parse_records(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Import file has an invalid transaction: {exc}") from exc

        self.replace(records)
        if isinstance(raw_goal, dict):
            self.save_goal(Goal.from_dict(raw_goal))
        return len(records)
