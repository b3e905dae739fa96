"""Injectable clocks used for month scoping, edit stamps and forecasts."""

from __future__ import annotations

from datetime import date, datetime


class SystemClock:
    """Wall clock."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return self.now().date()

    def timestamp_ms(self) -> int:
        return int(self.now().timestamp() * 1000)


class FixedClock(SystemClock):
    """Clock frozen at a given moment, for deterministic tests and reports."""

    def __init__(self, moment: datetime | date):
        if not isinstance(moment, datetime):
            moment = datetime(moment.year, moment.month, moment.day)
        self._moment = moment

    def now(self) -> datetime:
        return self._moment


def resolve_clock(clock: SystemClock | None) -> SystemClock:
    return clock if clock is not None else SystemClock()
