"""Fake Time implementation for testing."""

from datetime import datetime, timedelta

from pullreq.gateway.time.abc import Time

DEFAULT_FAKE_NOW = datetime(2024, 1, 15, 14, 30, 0)


class FakeTime(Time):
    """In-memory clock that advances only when sleep() is called.

    Mutation Tracking:
    -----------------
    - sleep_calls: Durations passed to sleep(), in call order
    """

    def __init__(self, *, current_time: datetime | None = None) -> None:
        self._current_time = current_time if current_time is not None else DEFAULT_FAKE_NOW
        self._sleep_calls: list[float] = []

    def sleep(self, seconds: float) -> None:
        """Record the sleep and advance the clock without blocking."""
        self._sleep_calls.append(seconds)
        self._current_time += timedelta(seconds=seconds)

    def now(self) -> datetime:
        return self._current_time

    @property
    def sleep_calls(self) -> list[float]:
        """Read-only access to recorded sleep durations for test assertions."""
        return list(self._sleep_calls)
