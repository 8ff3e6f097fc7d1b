from __future__ import annotations

import logging
import time
from threading import Lock, Timer
from typing import Callable


logger = logging.getLogger(__name__)


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class Stopwatch:
    """Millisecond stopwatch wrapped around a single round's answer read."""

    def __init__(self, clock_ms: Callable[[], int] = _monotonic_ms) -> None:
        self._clock_ms = clock_ms
        self._started_ms: int | None = None
        self.elapsed_ms = 0

    def start(self) -> None:
        self._started_ms = self._clock_ms()
        self.elapsed_ms = 0

    def stop(self) -> float:
        """Stop timing and return the elapsed seconds."""
        if self._started_ms is None:
            raise RuntimeError("stopwatch was stopped before it was started")
        self.elapsed_ms = max(self._clock_ms() - self._started_ms, 0)
        self._started_ms = None
        return self.elapsed_seconds

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0


class Countdown:
    """Session countdown that raises a lock-guarded expiry flag once."""

    def __init__(self, duration_s: float) -> None:
        self.duration_s = duration_s
        self._expired = False
        self._lock = Lock()
        self._timer: Timer | None = None

    def start(self) -> None:
        """Arm the background timer (non-blocking)."""
        if self._timer is not None:
            return
        self._timer = Timer(self.duration_s, self.expire)
        self._timer.daemon = True
        self._timer.start()
        logger.info("Countdown started: %.0fs", self.duration_s)

    def expire(self) -> None:
        with self._lock:
            if self._expired:
                return
            self._expired = True
        logger.info("Countdown expired")

    def expired(self) -> bool:
        with self._lock:
            return self._expired

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
