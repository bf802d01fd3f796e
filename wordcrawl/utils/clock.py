import threading
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    """Source of the current instant. Swappable so deadline behavior can be tested."""

    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock:
    """Manually advanced clock for tests and dry runs."""

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or datetime(2000, 1, 1, tzinfo=timezone.utc)
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self._now = self._now + timedelta(seconds=seconds)


def format_duration(duration: timedelta) -> str:
    """Render a duration as `Xm Ys Zms`, e.g. `1m 2s 30ms`."""
    total_ms = duration // timedelta(milliseconds=1)
    minutes, rem = divmod(total_ms, 60_000)
    seconds, millis = divmod(rem, 1000)
    return f"{minutes}m {seconds}s {millis}ms"
