"""Per-table RocksDB metric surface.

Constructing RocksDBTableMetrics for a table registers, in order:

1. the sharded catalog (rocksmetrics.metrics.catalog) once per shard,
   sourced from that shard's statistics object;
2. the IngestTime / IngestWaitTime histograms fed by the write path;
3. one SSTableCountPerLevel.<k> gauge per compaction level;
4. the PendingCompactionBytes and LiveDataSize gauges;
5. the RocksIterMove / RocksIterSeek / RocksIterNew counters fed by the read path.

Gauges re-query the engine on every read and go through safe_gauge, so an
engine handle that is missing or mid-compaction reads as 0 for that poll.
Registering the same table twice reuses the existing registry entries.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config.settings import RocksMetricsSettings
from ..engine.interfaces import EngineProperties, StatisticsSource
from ..engine.types import TableIdentity
from .catalog import SHARDED_CATALOG, CatalogEntry, MetricKind
from .naming import MetricName, RocksMetricNameFactory
from .registry import MetricsRegistry
from .safe_gauge import safe_gauge
from .sources import Counter, Gauge, Histogram, StatsCounter, StatsHistogram

logger = logging.getLogger(__name__)


def _catalog_metric(entry: CatalogEntry, stats: StatisticsSource) -> StatsHistogram | StatsCounter:
    if entry.kind is MetricKind.HISTOGRAM:
        return StatsHistogram(stats, entry.source)  # type: ignore[arg-type]
    return StatsCounter(stats, entry.source)  # type: ignore[arg-type]


class RocksDBTableMetrics:
    def __init__(self, table: TableIdentity, stats_list: Sequence[StatisticsSource], *,
                 engine: EngineProperties, registry: MetricsRegistry,
                 settings: RocksMetricsSettings | None = None) -> None:
        settings = settings or RocksMetricsSettings()
        self.table = table
        self.registry = registry
        self._engine = engine
        self.factory = RocksMetricNameFactory.for_table(table)
        self.num_shards = len(stats_list)
        self._identities: list[MetricName] = []

        for shard, stats in enumerate(stats_list):
            self._create_sharded_metrics(stats, shard)

        self.ingest_time_histogram: Histogram = registry.histogram(self._name("IngestTime"), biased=True)
        self.ingest_wait_time_histogram: Histogram = registry.histogram(self._name("IngestWaitTime"), biased=True)

        self.sstable_count_per_level: list[Gauge] = []
        for level in range(settings.max_levels):
            self.sstable_count_per_level.append(
                self._gauge(f"SSTableCountPerLevel.{level}",
                            self._level_reader(level),
                            "Failed to get sstable count by level.")
            )

        table_id = table.table_id
        self.pending_compaction_bytes: Gauge = self._gauge(
            "PendingCompactionBytes",
            lambda: engine.pending_compaction_bytes(table_id),
            "Failed to get pending compaction bytes",
        )
        self.estimate_live_data_size: Gauge = self._gauge(
            "LiveDataSize",
            lambda: engine.estimated_live_data_size(table_id),
            "Failed to get live data size",
        )

        self.iter_move: Counter = registry.counter(self._name("RocksIterMove"))
        self.iter_seek: Counter = registry.counter(self._name("RocksIterSeek"))
        self.iter_new: Counter = registry.counter(self._name("RocksIterNew"))

        logger.info(
            "metrics.table.registered keyspace=%s table=%s shards=%d metrics=%d",
            table.keyspace, table.name, self.num_shards, len(self._identities),
            extra={"event": "metrics.table.registered"},
        )

    def _level_reader(self, level: int):
        table_id = self.table.table_id
        return lambda: self._engine.sstable_count_by_level(table_id, level)

    def _name(self, label: str) -> MetricName:
        name = self.factory.create_metric_name(label)
        self._identities.append(name)
        return name

    def _gauge(self, label: str, fn, message: str) -> Gauge:
        name = self._name(label)
        wrapped = safe_gauge(fn, default=0, message=message, name=name.mbean_name,
                             failures=self.registry.gauge_failures)
        return self.registry.register(name, Gauge(wrapped))

    def _create_sharded_metrics(self, stats: StatisticsSource, shard: int) -> None:
        for entry in SHARDED_CATALOG:
            name = self.factory.create_sharded_metric_name(entry.label, shard)
            self.registry.register(name, _catalog_metric(entry, stats))
            self._identities.append(name)

    @property
    def identities(self) -> tuple[MetricName, ...]:
        return tuple(self._identities)

    def sharded_identities(self, shard: int) -> list[MetricName]:
        scope = f"{self.factory.keyspace_name}.{self.factory.table_name}_{shard}"
        return [n for n in self._identities if n.scope == scope]

    def release(self) -> int:
        """Unregister this table's metrics (table dropped). Returns the number removed."""
        removed = sum(1 for n in self._identities if self.registry.remove(n))
        logger.info(
            "metrics.table.released keyspace=%s table=%s removed=%d",
            self.table.keyspace, self.table.name, removed,
            extra={"event": "metrics.table.released"},
        )
        return removed


__all__ = ["RocksDBTableMetrics"]
