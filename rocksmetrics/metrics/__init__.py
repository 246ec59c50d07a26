"""Metrics package public interface.

Stable import surfaces supported:
	from rocksmetrics.metrics import MetricsRegistry, RocksDBTableMetrics
	from rocksmetrics.metrics import RocksMetricNameFactory, DEFAULT_FACTORY
	from rocksmetrics.metrics import isolated_metrics_registry
"""
from __future__ import annotations

from .catalog import COUNTER_ENTRIES, HISTOGRAM_ENTRIES, SHARDED_CATALOG, CatalogEntry, MetricKind
from .context import RocksMetricsContext, get_context
from .introspection import build_inventory, dump_inventory
from .naming import DEFAULT_FACTORY, MetricName, RocksMetricNameFactory
from .registry import MetricsRegistry
from .safe_gauge import safe_gauge
from .sources import Counter, Gauge, Histogram, StatsCounter, StatsHistogram
from .table_metrics import RocksDBTableMetrics
from .testing import isolated_metrics_registry
from .throughput_gauges import register_throughput_gauges

__all__ = [
	"CatalogEntry",
	"MetricKind",
	"SHARDED_CATALOG",
	"HISTOGRAM_ENTRIES",
	"COUNTER_ENTRIES",
	"RocksMetricsContext",
	"get_context",
	"build_inventory",
	"dump_inventory",
	"DEFAULT_FACTORY",
	"MetricName",
	"RocksMetricNameFactory",
	"MetricsRegistry",
	"safe_gauge",
	"Counter",
	"Gauge",
	"Histogram",
	"StatsCounter",
	"StatsHistogram",
	"RocksDBTableMetrics",
	"isolated_metrics_registry",
	"register_throughput_gauges",
]
