"""Process-wide streaming throughput tracker.

Usage:
    from rocksmetrics.engine.throughput import ThroughputManager
    tm = ThroughputManager(window_seconds=10)
    tm.record_outgoing(len(chunk))
    tm.outgoing_throughput()  # bytes/second over the last 10s

Thread-safe (one lock per direction). Constructed once at process start and
passed explicitly to whatever registers the throughput gauges.
"""
from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable


class _Window:
    __slots__ = ("_window", "_events", "_total", "_lock", "_clock")

    def __init__(self, window_seconds: float, clock: Callable[[], float]) -> None:
        self._window = float(window_seconds)
        self._events: deque[tuple[float, int]] = deque()
        self._total = 0
        self._lock = threading.Lock()
        self._clock = clock

    def _evict(self, now: float) -> None:
        horizon = now - self._window
        while self._events and self._events[0][0] <= horizon:
            _, n = self._events.popleft()
            self._total -= n

    def add(self, nbytes: int) -> None:
        with self._lock:
            now = self._clock()
            self._events.append((now, nbytes))
            self._total += nbytes
            self._evict(now)

    def rate(self) -> int:
        with self._lock:
            now = self._clock()
            self._evict(now)
            return int(self._total / self._window)


class ThroughputManager:
    """Sliding-window byte rate for outgoing and incoming streams."""

    def __init__(self, window_seconds: float = 10.0, clock: Callable[[], float] | None = None) -> None:
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        clock = clock or time.monotonic
        self.window_seconds = float(window_seconds)
        self._outgoing = _Window(window_seconds, clock)
        self._incoming = _Window(window_seconds, clock)

    def record_outgoing(self, nbytes: int) -> None:
        if nbytes < 0:
            raise ValueError("nbytes must be >= 0")
        self._outgoing.add(nbytes)

    def record_incoming(self, nbytes: int) -> None:
        if nbytes < 0:
            raise ValueError("nbytes must be >= 0")
        self._incoming.add(nbytes)

    def outgoing_throughput(self) -> int:
        return self._outgoing.rate()

    def incoming_throughput(self) -> int:
        return self._incoming.rate()


__all__ = ["ThroughputManager"]
