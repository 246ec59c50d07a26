"""Process-level wiring for RocksDB table metrics.

A RocksMetricsContext is built once at process start with the shared
collaborators (registry, engine property accessor, throughput tracker,
settings). Building it registers the process-wide throughput gauges; each
table then gets its metric surface through `table_metrics()`.

    ctx = RocksMetricsContext(engine, settings=load_settings())
    tm = ctx.table_metrics(TableIdentity("ks1", "t1", cf_id), shard_stats)
    tm.iter_seek.inc()
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config.settings import RocksMetricsSettings
from ..engine.interfaces import EngineProperties, StatisticsSource, ThroughputSource
from ..engine.throughput import ThroughputManager
from ..engine.types import TableIdentity
from . import _singleton
from .registry import MetricsRegistry
from .table_metrics import RocksDBTableMetrics
from .throughput_gauges import register_throughput_gauges

logger = logging.getLogger(__name__)


class RocksMetricsContext:
    def __init__(self, engine: EngineProperties, *, registry: MetricsRegistry | None = None,
                 throughput: ThroughputSource | None = None,
                 settings: RocksMetricsSettings | None = None) -> None:
        self.settings = settings or RocksMetricsSettings()
        self.engine = engine
        self.registry = registry if registry is not None else MetricsRegistry(namespace=self.settings.namespace)
        self.throughput = throughput if throughput is not None else ThroughputManager(
            window_seconds=self.settings.throughput_window_seconds)
        self.outgoing_throughput, self.incoming_throughput = register_throughput_gauges(
            self.registry, self.throughput)
        logger.debug("metrics.context.created namespace=%s max_levels=%d",
                     self.registry.namespace, self.settings.max_levels)

    def table_metrics(self, table: TableIdentity, stats_list: Sequence[StatisticsSource]) -> RocksDBTableMetrics:
        return RocksDBTableMetrics(table, stats_list, engine=self.engine,
                                   registry=self.registry, settings=self.settings)


def get_context(engine: EngineProperties | None = None, **kwargs) -> RocksMetricsContext:
    """Return the process-wide context, creating it on first use.

    The first call must supply the engine accessor; later calls may omit it.
    """
    existing = _singleton.get_context()
    if existing is not None:
        return existing
    if engine is None:
        raise RuntimeError("rocksmetrics context not initialized; pass the engine accessor on first use")
    return _singleton.create_if_absent(lambda: RocksMetricsContext(engine, **kwargs))


__all__ = ["RocksMetricsContext", "get_context"]
