"""Sinks for user-facing messages such as validation failures."""

from __future__ import annotations

from typing import List

try:
    from .logging_setup import get_logger
except ImportError:
    from logging_setup import get_logger

logger = get_logger("finance_tracker.notifications")


class LoggingNotifier:
    """Write every message to the package log."""

    def notify(self, message: str) -> None:
        logger.warning("%s", message)


class CollectingNotifier:
    """Keep messages in memory so a UI or test can show them later."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def drain(self) -> List[str]:
        messages, self.messages = self.messages, []
        return messages
