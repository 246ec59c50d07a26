"""Protocols for the collaborators the metrics layer reads from."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import HistogramData, HistogramType, TickerType


@runtime_checkable
class StatisticsSource(Protocol):
    """Per-shard engine statistics object."""

    def get_histogram_data(self, histogram_type: HistogramType) -> HistogramData: ...

    def get_ticker_count(self, ticker_type: TickerType) -> int: ...


@runtime_checkable
class EngineProperties(Protocol):
    """Live engine property queries, keyed by table id.

    Implementations may raise when the engine handle for a table does not
    exist yet or is mid-compaction; callers must tolerate that.
    """

    def sstable_count_by_level(self, table_id: object, level: int) -> int: ...

    def pending_compaction_bytes(self, table_id: object) -> int: ...

    def estimated_live_data_size(self, table_id: object) -> int: ...


@runtime_checkable
class ThroughputSource(Protocol):
    def outgoing_throughput(self) -> int: ...

    def incoming_throughput(self) -> int: ...


__all__ = ["StatisticsSource", "EngineProperties", "ThroughputSource"]
