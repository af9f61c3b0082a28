from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Current UTC time as a naive datetime (the form stored in created_at columns)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock:
    """Returns the same instant until moved with advance()."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, delta) -> datetime:
        self.instant = self.instant + delta
        return self.instant


_system_clock = SystemClock()


def get_clock() -> Clock:
    """FastAPI dependency; tests swap it through app.dependency_overrides."""
    return _system_clock
