"""rocksmetrics: RocksDB table metrics naming and registration."""
from .engine import HistogramData, HistogramType, TableIdentity, ThroughputManager, TickerType
from .metrics import MetricsRegistry, RocksDBTableMetrics, RocksMetricsContext, get_context

__version__ = "0.1.0"

__all__ = [
    "HistogramData",
    "HistogramType",
    "TableIdentity",
    "ThroughputManager",
    "TickerType",
    "MetricsRegistry",
    "RocksDBTableMetrics",
    "RocksMetricsContext",
    "get_context",
]
