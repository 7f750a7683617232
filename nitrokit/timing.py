"""Frame delta timing and simple benchmarking."""

from __future__ import annotations

import time
from typing import Callable, Optional

DEFAULT_MAX_DELTA = 0.1


class DeltaTimer:
    """Measures the time between successive updates, capped at ``max_delta``."""

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        max_delta: float = DEFAULT_MAX_DELTA,
    ) -> None:
        self._clock = clock
        self.max_delta = max_delta
        self._previous = clock()
        self.delta = 0.0

    def update(self) -> float:
        """Record a new frame and return the capped time since the last one."""
        now = self._clock()
        elapsed = now - self._previous
        self._previous = now
        self.delta = min(elapsed, self.max_delta)
        return self.delta


class Benchmark:
    """Measures the time spent between ``start`` and ``stop``."""

    def __init__(self, clock: Callable[[], int] = time.thread_time_ns) -> None:
        self._clock = clock
        self._started: Optional[int] = None

    def start(self) -> None:
        self._started = self._clock()

    def stop(self) -> int:
        """Return the time elapsed since ``start``."""
        if self._started is None:
            raise RuntimeError("benchmark was not started")
        elapsed = self._clock() - self._started
        self._started = None
        return elapsed

    def __enter__(self) -> "Benchmark":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.elapsed = self.stop()