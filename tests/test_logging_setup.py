"""Tests for package logging configuration."""

from __future__ import annotations

import io
import logging

import finance_tracker.logging_setup as logging_setup


def test_parse_level_variants(monkeypatch) -> None:
    monkeypatch.delenv('FINTRACK_LOG_LEVEL', raising=False)
    assert logging_setup._parse_level(None) == logging.INFO
    assert logging_setup._parse_level('debug') == logging.DEBUG
    assert logging_setup._parse_level('30') == 30
    assert logging_setup._parse_level(logging.ERROR) == logging.ERROR
    assert logging_setup._parse_level('nonsense') == logging.INFO
    monkeypatch.setenv('FINTRACK_LOG_LEVEL', 'warning')
    assert logging_setup._parse_level(None) == logging.WARNING


def test_configure_logging_once(monkeypatch) -> None:
    logger = logging.getLogger('finance_tracker')
    monkeypatch.setattr(logging_setup, '_configured', False)
    monkeypatch.setattr(logger, 'handlers', [])
    monkeypatch.setattr(logger, 'propagate', True)
    monkeypatch.setattr(logger, 'level', logging.NOTSET)

    stream = io.StringIO()
    logging_setup.configure_logging('INFO', fmt='%(name)s %(message)s', stream=stream)
    logging_setup.configure_logging('DEBUG', stream=io.StringIO())
    logging_setup.get_logger('finance_tracker.store').info('Stored %d transactions', 3)

    assert len(logger.handlers) == 1
    assert stream.getvalue().strip() == 'finance_tracker.store Stored 3 transactions'
