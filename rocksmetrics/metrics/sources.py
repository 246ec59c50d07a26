"""Metric objects held by the MetricsRegistry.

Two families:

* Read-through metrics that hold a reference to a live source and re-read it
  on every scrape: `Gauge` (any zero-arg callable), `StatsHistogram` and
  `StatsCounter` (one statistic of one shard's engine statistics object).
* Writable handles the owning read/write path updates directly: `Counter`
  and `Histogram`. Both wrap an unregistered prometheus_client primitive
  (registry=None) so increments and observations are thread-safe; the
  MetricsRegistry re-labels their samples at scrape time.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from prometheus_client import Counter as _PromCounter
from prometheus_client import Histogram as _PromHistogram

from ..engine.interfaces import StatisticsSource
from ..engine.types import HistogramData, HistogramType, TickerType
from .catalog import MetricKind

# Bucket layout for write-path timings recorded in microseconds.
LATENCY_BUCKETS_MICROS: tuple[float, ...] = (
    10, 25, 50, 100, 250, 500,
    1_000, 2_500, 5_000, 10_000, 25_000, 50_000,
    100_000, 250_000, 500_000, 1_000_000, 2_500_000, 5_000_000, 10_000_000,
    float("inf"),
)

_HANDLE_NAME = "rocksmetrics_handle"


class Gauge:
    kind = MetricKind.GAUGE

    def __init__(self, fn: Callable[[], Any]) -> None:
        self._fn = fn

    def get_value(self) -> Any:
        return self._fn()


class StatsHistogram:
    kind = MetricKind.HISTOGRAM

    def __init__(self, stats: StatisticsSource, histogram_type: HistogramType) -> None:
        self.stats = stats
        self.histogram_type = histogram_type

    def get_snapshot(self) -> HistogramData:
        return self.stats.get_histogram_data(self.histogram_type)


class StatsCounter:
    kind = MetricKind.COUNTER

    def __init__(self, stats: StatisticsSource, ticker_type: TickerType) -> None:
        self.stats = stats
        self.ticker_type = ticker_type

    def get_count(self) -> int:
        return int(self.stats.get_ticker_count(self.ticker_type))


def _sample_value(collector: Any, suffix: str) -> float:
    for metric in collector.collect():
        for s in metric.samples:
            if s.name.endswith(suffix):
                return s.value
    return 0.0


class Counter:
    """Monotonic counter handle (atomic increments)."""
    kind = MetricKind.COUNTER

    def __init__(self) -> None:
        self._counter = _PromCounter(_HANDLE_NAME, "rocksmetrics counter handle", registry=None)

    def inc(self, n: int = 1) -> None:
        self._counter.inc(n)

    def get_count(self) -> int:
        return int(_sample_value(self._counter, "_total"))


class Histogram:
    """Writable histogram handle; `biased` selects the microsecond latency buckets."""
    kind = MetricKind.HISTOGRAM

    def __init__(self, biased: bool = False, buckets: Sequence[float] | None = None) -> None:
        self.biased = biased
        if buckets is None:
            buckets = LATENCY_BUCKETS_MICROS if biased else _PromHistogram.DEFAULT_BUCKETS
        self._histogram = _PromHistogram(_HANDLE_NAME, "rocksmetrics histogram handle",
                                         buckets=buckets, registry=None)

    def update(self, value: float) -> None:
        self._histogram.observe(value)

    def get_count(self) -> int:
        return int(_sample_value(self._histogram, "_count"))

    def get_sum(self) -> float:
        return _sample_value(self._histogram, "_sum")

    def buckets(self) -> list[tuple[str, float]]:
        """Cumulative (le, count) pairs ending with +Inf."""
        out: list[tuple[str, float]] = []
        for metric in self._histogram.collect():
            for s in metric.samples:
                if s.name.endswith("_bucket"):
                    out.append((s.labels["le"], s.value))
        return out


__all__ = [
    "Gauge",
    "StatsHistogram",
    "StatsCounter",
    "Counter",
    "Histogram",
    "LATENCY_BUCKETS_MICROS",
]
