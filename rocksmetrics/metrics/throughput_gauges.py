"""Process-wide streaming throughput gauges.

Registered under the table-less "all" scope (DEFAULT_FACTORY). The throughput
tracker is passed in explicitly; the gauges hold a reference to it and read
it on every poll. Registration goes through the registry's get-or-create
path, so calling this once per table (or once per process) yields the same
two gauges.
"""
from __future__ import annotations

import logging

from ..engine.interfaces import ThroughputSource
from .naming import DEFAULT_FACTORY
from .registry import MetricsRegistry
from .safe_gauge import safe_gauge
from .sources import Gauge

logger = logging.getLogger(__name__)

OUTGOING_THROUGHPUT = "RocksdbOutgoingThroughput"
INCOMING_THROUGHPUT = "RocksdbIncomingThroughput"


def register_throughput_gauges(registry: MetricsRegistry, throughput: ThroughputSource) -> tuple[Gauge, Gauge]:
    """Register (or fetch) the outgoing/incoming throughput gauges."""
    out_name = DEFAULT_FACTORY.create_metric_name(OUTGOING_THROUGHPUT)
    in_name = DEFAULT_FACTORY.create_metric_name(INCOMING_THROUGHPUT)
    if out_name in registry and in_name in registry:
        logger.debug("metrics.throughput_gauges.already_registered")
    outgoing = registry.register(out_name, Gauge(safe_gauge(
        throughput.outgoing_throughput,
        message="Failed to get outgoing throughput",
        name=out_name.mbean_name,
        failures=registry.gauge_failures,
    )))
    incoming = registry.register(in_name, Gauge(safe_gauge(
        throughput.incoming_throughput,
        message="Failed to get incoming throughput",
        name=in_name.mbean_name,
        failures=registry.gauge_failures,
    )))
    return outgoing, incoming


__all__ = ["register_throughput_gauges", "OUTGOING_THROUGHPUT", "INCOMING_THROUGHPUT"]
