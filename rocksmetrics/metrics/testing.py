"""Testing helpers for metrics isolation.

Provides:
  - isolated_metrics_registry(): a fresh MetricsRegistry on its own
    CollectorRegistry, with the process context anchor cleared for the
    duration of the block and restored afterwards.
  - FakeStatistics / FakeEngine: in-memory stand-ins for a shard's engine
    statistics object and the engine property accessor. FakeEngine can be
    told to fail a given query (per level) to exercise the zero-on-failure path.
"""
from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from prometheus_client import CollectorRegistry

from ..engine.types import HistogramData, HistogramType, TickerType
from . import _singleton
from .registry import MetricsRegistry


@contextmanager
def isolated_metrics_registry(namespace: str = "cassandra_rocksdb") -> Iterator[MetricsRegistry]:
    prev = _singleton.get_context()
    _singleton.clear_context()
    try:
        yield MetricsRegistry(namespace=namespace, collector_registry=CollectorRegistry())
    finally:
        _singleton.clear_context()
        if prev is not None:
            _singleton.set_context(prev)


class FakeStatistics:
    def __init__(self) -> None:
        self.histograms: dict[HistogramType, HistogramData] = {}
        self.tickers: dict[TickerType, int] = {}
        self.histogram_reads = 0
        self.ticker_reads = 0

    def get_histogram_data(self, histogram_type: HistogramType) -> HistogramData:
        self.histogram_reads += 1
        return self.histograms.get(histogram_type, HistogramData())

    def get_ticker_count(self, ticker_type: TickerType) -> int:
        self.ticker_reads += 1
        return self.tickers.get(ticker_type, 0)


class FakeEngine:
    """Engine property accessor keyed by table id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.sstables: dict[tuple[object, int], int] = {}
        self.pending: dict[object, int] = {}
        self.live_size: dict[object, int] = {}
        self.failing_levels: set[int] = set()
        self.fail_all = False

    def _check(self, table_id: object) -> None:
        if self.fail_all:
            raise RuntimeError(f"no engine handle for table {table_id!r}")

    def sstable_count_by_level(self, table_id: object, level: int) -> int:
        self._check(table_id)
        if level in self.failing_levels:
            raise RuntimeError(f"level {level} unavailable")
        with self._lock:
            return self.sstables.get((table_id, level), 0)

    def pending_compaction_bytes(self, table_id: object) -> int:
        self._check(table_id)
        with self._lock:
            return self.pending.get(table_id, 0)

    def estimated_live_data_size(self, table_id: object) -> int:
        self._check(table_id)
        with self._lock:
            return self.live_size.get(table_id, 0)


__all__ = ["isolated_metrics_registry", "FakeStatistics", "FakeEngine"]
