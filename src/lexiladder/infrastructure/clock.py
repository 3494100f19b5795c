"""Clock adapters."""

import time


class SystemClock:
    """Wall-clock time."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """
    A clock frozen at a given instant until moved explicitly.

    Used in tests and for replaying a session at a known time.
    """

    def __init__(self, now_ms: int):
        self._now = now_ms

    def now_ms(self) -> int:
        return self._now

    def set(self, now_ms: int) -> None:
        self._now = now_ms

    def advance(self, ms: int = 0, *, days: float = 0) -> int:
        self._now += ms + int(days * 86_400_000)
        return self._now
