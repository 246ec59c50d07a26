"""Identity-keyed metrics registry.

The registry maps MetricName identities to metric objects (see
rocksmetrics.metrics.sources) with get-or-create semantics: registering an
identity that is already present returns the existing metric and drops the
new one, so re-registering a table (or the process-wide throughput gauges)
never raises and never duplicates.

Exposition goes through a prometheus_client CollectorRegistry. One custom
collector is registered with it; at scrape time it groups metrics sharing a
label into a single family named `<namespace>_<snake_label>` and emits one
series per identity, labelled with `keyspace` and `scope` (table name, with
the `_<shard>` suffix for sharded metrics). A numeric `.<k>` suffix on a
label is moved into a `level` label, so the per-level gauges share a family:

    cassandra_rocksdb_get_micros{keyspace="ks1",scope="t1_0",quantile="0.5"} 12.0
    cassandra_rocksdb_rocks_iter_seek_total{keyspace="ks1",scope="t1"} 3.0
    cassandra_rocksdb_ss_table_count_per_level{keyspace="ks1",scope="t1",level="3"} 4.0

A metric whose read raises during a scrape is skipped for that scrape only.
"""
from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterable, Iterator
from typing import Any

from prometheus_client import Counter as _PromCounter
from prometheus_client.core import (
    CounterMetricFamily,
    GaugeMetricFamily,
    HistogramMetricFamily,
    SummaryMetricFamily,
)
from prometheus_client.registry import Collector, CollectorRegistry

from ..config.settings import DEFAULT_NAMESPACE
from ..utils.exceptions import RegistrationError
from .naming import MetricName
from .sources import Counter, Gauge, Histogram, StatsCounter, StatsHistogram

logger = logging.getLogger(__name__)

LABEL_NAMES = ("keyspace", "scope")

_EXPOSITION_TYPES: dict[type, str] = {
    Gauge: "gauge",
    Counter: "counter",
    StatsCounter: "counter",
    Histogram: "histogram",
    StatsHistogram: "summary",
}

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_INVALID_RE = re.compile(r"[^a-zA-Z0-9_]+")
_LEVEL_RE = re.compile(r"^(?P<base>.+)\.(?P<level>\d+)$")


def snake_case(label: str) -> str:
    """GetMicros -> get_micros, WALFileSyncMicros -> wal_file_sync_micros, SSTableCountPerLevel.3 -> ss_table_count_per_level_3."""
    s = _CAMEL_RE.sub("_", label)
    s = _INVALID_RE.sub("_", s).strip("_")
    return s.lower()


def split_level(label: str) -> tuple[str, str | None]:
    """SSTableCountPerLevel.3 -> ("SSTableCountPerLevel", "3"); labels without a numeric suffix pass through."""
    m = _LEVEL_RE.match(label)
    if m is None:
        return label, None
    return m.group("base"), m.group("level")


def _exposition_type(metric: Any) -> str:
    for cls, typ in _EXPOSITION_TYPES.items():
        if isinstance(metric, cls):
            return typ
    raise RegistrationError(f"unsupported metric object {type(metric).__name__}")


class _RegistryCollector(Collector):
    def __init__(self, owner: MetricsRegistry) -> None:
        self._owner = owner

    @property
    def namespace(self) -> str:
        return self._owner.namespace

    def describe(self) -> Iterable[Any]:
        # Identities are added at runtime; skip up-front name reservation.
        return []

    def collect(self) -> Iterator[Any]:
        return iter(self._owner._build_families())


class MetricsRegistry:
    """Get-or-create metric store exported through one prometheus collector.

    Building a second registry with the same namespace on the same
    CollectorRegistry (context rebuild, test reset) detaches the earlier
    registry's collector and reuses its gauge failure counter.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE,
                 collector_registry: CollectorRegistry | None = None) -> None:
        self.namespace = namespace
        self._lock = threading.RLock()
        self._metrics: dict[MetricName, Any] = {}
        # family name -> (exposition type, has level label)
        self._family_types: dict[str, tuple[str, bool]] = {}
        self._family_members: dict[str, int] = {}
        self._collector_registry = collector_registry if collector_registry is not None else CollectorRegistry()
        self._collector = _RegistryCollector(self)
        self._attach_collector()
        self.gauge_failures = self._failures_counter()

    def _attach_collector(self) -> None:
        reg = self._collector_registry
        for existing in list(getattr(reg, "_collector_to_names", {})):
            if isinstance(existing, _RegistryCollector) and existing.namespace == self.namespace:
                reg.unregister(existing)
                logger.info("metrics.registry.superseded namespace=%s", self.namespace,
                            extra={"event": "metrics.registry.superseded"})
        reg.register(self._collector)

    def _failures_counter(self) -> _PromCounter:
        name = f"{self.namespace}_gauge_evaluation_failures"
        try:
            return _PromCounter(
                name,
                "Gauge evaluations that raised and were reported as the default value",
                ["gauge"],
                registry=self._collector_registry,
            )
        except ValueError:
            # Duplicate: recover the counter an earlier registry created
            existing = getattr(self._collector_registry, "_names_to_collectors", {}).get(name)
            if not isinstance(existing, _PromCounter):
                raise RegistrationError(f"{name} is already registered by a foreign collector") from None
            logger.debug("metrics.registry.reuse_collector name=%s", name)
            return existing

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(self, name: MetricName, metric: Any) -> Any:
        """Bind metric to name, or return the metric already bound to it."""
        typ = _exposition_type(metric)
        with self._lock:
            existing = self._metrics.get(name)
            if existing is not None:
                if _exposition_type(existing) != typ:
                    raise RegistrationError(
                        f"{name.mbean_name} already registered as {type(existing).__name__}, "
                        f"cannot register {type(metric).__name__}"
                    )
                logger.debug("metrics.register.reuse name=%s", name.mbean_name)
                return existing
            fam_name = self.family_name(name.name)
            shape = (typ, split_level(name.name)[1] is not None)
            bound = self._family_types.get(fam_name)
            if bound is not None and bound != shape:
                raise RegistrationError(
                    f"family {fam_name!r} is exported as {bound[0]} (level label: {bound[1]}); "
                    f"cannot add a {typ} for {name.mbean_name}"
                )
            self._family_types[fam_name] = shape
            self._family_members[fam_name] = self._family_members.get(fam_name, 0) + 1
            self._metrics[name] = metric
            return metric

    def counter(self, name: MetricName) -> Counter:
        with self._lock:
            existing = self._metrics.get(name)
            if existing is not None and not isinstance(existing, Counter):
                raise RegistrationError(f"{name.mbean_name} is a {type(existing).__name__}, not a Counter")
            return self.register(name, existing or Counter())

    def histogram(self, name: MetricName, biased: bool = False) -> Histogram:
        with self._lock:
            existing = self._metrics.get(name)
            if existing is not None and not isinstance(existing, Histogram):
                raise RegistrationError(f"{name.mbean_name} is a {type(existing).__name__}, not a Histogram")
            return self.register(name, existing or Histogram(biased=biased))

    def remove(self, name: MetricName) -> bool:
        with self._lock:
            if self._metrics.pop(name, None) is None:
                return False
            fam_name = self.family_name(name.name)
            left = self._family_members[fam_name] - 1
            if left:
                self._family_members[fam_name] = left
            else:
                del self._family_members[fam_name]
                del self._family_types[fam_name]
            return True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get(self, name: MetricName) -> Any | None:
        with self._lock:
            return self._metrics.get(name)

    def names(self, scope: str | None = None) -> list[MetricName]:
        with self._lock:
            if scope is None:
                return list(self._metrics)
            return [n for n in self._metrics if n.scope == scope]

    def items(self) -> list[tuple[MetricName, Any]]:
        with self._lock:
            return list(self._metrics.items())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._metrics

    def __len__(self) -> int:
        with self._lock:
            return len(self._metrics)

    @property
    def collector_registry(self) -> CollectorRegistry:
        return self._collector_registry

    def family_name(self, label: str) -> str:
        return f"{self.namespace}_{snake_case(split_level(label)[0])}"

    def get_sample_value(self, name: str, labels: dict[str, str] | None = None) -> float | None:
        return self._collector_registry.get_sample_value(name, labels or {})

    # ------------------------------------------------------------------
    # Exposition
    # ------------------------------------------------------------------
    def _new_family(self, typ: str, fam_name: str, label: str) -> Any:
        base, level = split_level(label)
        doc = f"Rocksdb {base}"
        labels = LABEL_NAMES + ("level",) if level is not None else LABEL_NAMES
        if typ == "gauge":
            return GaugeMetricFamily(fam_name, doc, labels=labels)
        if typ == "counter":
            return CounterMetricFamily(fam_name, doc, labels=labels)
        if typ == "histogram":
            return HistogramMetricFamily(fam_name, doc, labels=labels)
        return SummaryMetricFamily(fam_name, doc, labels=labels)

    def _add_sample(self, family: Any, name: MetricName, metric: Any) -> None:
        level = split_level(name.name)[1]
        values = [name.keyspace, name.table]
        label_names = LABEL_NAMES
        if level is not None:
            values.append(level)
            label_names = LABEL_NAMES + ("level",)
        if isinstance(metric, Gauge):
            family.add_metric(values, float(metric.get_value()))
        elif isinstance(metric, (Counter, StatsCounter)):
            family.add_metric(values, metric.get_count())
        elif isinstance(metric, Histogram):
            family.add_metric(values, metric.buckets(), metric.get_sum())
        else:
            snap = metric.get_snapshot()
            family.add_metric(values, snap.count, snap.sum)
            labels = dict(zip(label_names, values))
            for q, v in (("0.5", snap.median), ("0.95", snap.percentile95), ("0.99", snap.percentile99)):
                family.add_sample(family.name, dict(labels, quantile=q), v)

    def _build_families(self) -> list[Any]:
        snapshot = self.items()
        families: dict[str, Any] = {}
        for name, metric in snapshot:
            fam_name = self.family_name(name.name)
            family = families.get(fam_name)
            if family is None:
                family = self._new_family(_exposition_type(metric), fam_name, name.name)
                families[fam_name] = family
            try:
                self._add_sample(family, name, metric)
            except Exception:  # noqa: BLE001 one bad source must not fail the scrape
                logger.warning("metrics.collect.read_failed name=%s", name.mbean_name, exc_info=True)
        return list(families.values())


__all__ = ["MetricsRegistry", "snake_case", "split_level", "LABEL_NAMES"]
