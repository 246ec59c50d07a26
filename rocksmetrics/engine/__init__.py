"""Engine-facing types and collaborator interfaces.

The storage engine itself is external: this package only describes what the
metrics layer reads from it (statistic type enumerations, the histogram
snapshot record, and the protocols for statistics, properties and throughput).
"""
from .interfaces import EngineProperties, StatisticsSource, ThroughputSource
from .throughput import ThroughputManager
from .types import HistogramData, HistogramType, TableIdentity, TickerType

__all__ = [
    "EngineProperties",
    "StatisticsSource",
    "ThroughputSource",
    "ThroughputManager",
    "HistogramData",
    "HistogramType",
    "TableIdentity",
    "TickerType",
]
