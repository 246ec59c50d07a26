"""Metric identity construction.

A MetricName is the registry key for one metric: hierarchical
group/type/scope/name fields plus a flattened mbean-style display string
built in the fixed order type, keyspace, scope, name. Construction is a pure
string computation, so building the same identity twice yields equal (and
byte-identical) values; the registry relies on that for get-or-create.

Sharded metrics (one per internal engine instance backing a table) append
`_<shard>` to the table part of the scope:

    factory = RocksMetricNameFactory("ks1", "t1")
    factory.create_metric_name("IngestTime").scope              -> "ks1.t1"
    factory.create_sharded_metric_name("GetMicros", 2).scope    -> "ks1.t1_2"
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from ..engine.types import TableIdentity
from ..utils.exceptions import MetricNameError

GROUP = "org.apache.cassandra.metrics"
TYPE = "Rocksdb"
ALL_SCOPE = "all"

# Characters that would corrupt the flattened mbean name when parsed back.
_RESERVED_RE = re.compile(r"[:,=\s]")


@dataclass(frozen=True)
class MetricName:
    group: str
    type: str
    name: str
    scope: str
    mbean_name: str

    @property
    def keyspace(self) -> str:
        return self.scope.split(".", 1)[0]

    @property
    def table(self) -> str:
        return self.scope.split(".", 1)[1]

    def __str__(self) -> str:
        return self.mbean_name


def _check_part(kind: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise MetricNameError(f"{kind} must be a non-empty string (got {value!r})")
    if _RESERVED_RE.search(value):
        raise MetricNameError(f"{kind} contains a reserved separator: {value!r}")


class RocksMetricNameFactory:
    """Builds MetricName values scoped to one table (or the "all" aggregate)."""

    def __init__(self, keyspace: str = ALL_SCOPE, table: str = ALL_SCOPE) -> None:
        _check_part("keyspace", keyspace)
        _check_part("table", table)
        if "." in keyspace:
            raise MetricNameError(f"keyspace must not contain '.': {keyspace!r}")
        self.keyspace_name = keyspace
        self.table_name = table

    @classmethod
    def for_table(cls, table: TableIdentity) -> RocksMetricNameFactory:
        return cls(table.keyspace, table.name)

    def _build(self, metric_name: str, table_name: str) -> MetricName:
        _check_part("metric name", metric_name)
        mbean_name = (
            f"{GROUP}:type={TYPE}"
            f",keyspace={self.keyspace_name}"
            f",scope={table_name}"
            f",name={metric_name}"
        )
        return MetricName(GROUP, TYPE, metric_name, f"{self.keyspace_name}.{table_name}", mbean_name)

    def create_metric_name(self, metric_name: str) -> MetricName:
        return self._build(metric_name, self.table_name)

    def create_sharded_metric_name(self, metric_name: str, shard: int) -> MetricName:
        if isinstance(shard, bool) or not isinstance(shard, int) or shard < 0:
            raise MetricNameError(f"shard must be a non-negative int (got {shard!r})")
        return self._build(metric_name, f"{self.table_name}_{shard}")

    def __repr__(self) -> str:
        return f"RocksMetricNameFactory({self.keyspace_name!r}, {self.table_name!r})"


DEFAULT_FACTORY = RocksMetricNameFactory()

__all__ = ["MetricName", "RocksMetricNameFactory", "DEFAULT_FACTORY", "GROUP", "TYPE", "ALL_SCOPE"]
