"""Pytest configuration for test isolation.

The record store defaults to ``<project>/data/transactions.json``.  An
autouse fixture points ``FINTRACK_DATA_DIR`` at a per-test temporary
directory so tests never read or write the real data file.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    data_root = tmp_path / "data"
    data_root.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("FINTRACK_DATA_DIR", os.fspath(data_root))
    monkeypatch.delenv("FINTRACK_STORE_PATH", raising=False)
