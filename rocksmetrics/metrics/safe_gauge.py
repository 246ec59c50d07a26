"""Error-tolerant gauge evaluation.

`safe_gauge` wraps a zero-arg value function so that any exception raised
while evaluating it is caught, logged at warning level and replaced by a
default reading. Every engine-derived gauge goes through this wrapper, so a
missing engine handle or a table mid-compaction zeroes one reading instead of
unwinding into the scrape loop.

    read_level = safe_gauge(lambda: engine.sstable_count_by_level(tid, 3),
                            message="Failed to get sstable count by level.",
                            name=name.mbean_name,
                            failures=registry.gauge_failures)

When a failures counter is supplied, `failures.labels(gauge).inc()` is called
on every failed evaluation; problems with the counter itself are ignored.
"""
from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

_log = logging.getLogger("rocksmetrics.metrics.safe_gauge")


def safe_gauge(fn: Callable[[], T], *, default: T = 0, message: str = "Gauge evaluation failed",
               name: str | None = None, failures: Any = None) -> Callable[[], T]:
    ident = name or getattr(fn, "__qualname__", "<gauge>")

    @functools.wraps(fn)
    def wrapper() -> T:
        try:
            return fn()
        except Exception:  # noqa: BLE001 broad to keep the scrape path alive
            _log.warning("%s gauge=%s", message, ident, exc_info=True)
            if failures is not None:
                try:
                    failures.labels(ident).inc()
                except Exception:  # safeguard against counter misconfiguration
                    pass
            return default
    return wrapper


__all__ = ["safe_gauge"]
