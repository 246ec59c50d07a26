"""rocksmetrics exception hierarchy.

A small exception tree for the failures that are allowed to escape this
package. Transient engine-query failures never appear here: they are
absorbed at the gauge boundary (see rocksmetrics.metrics.safe_gauge).
"""
from __future__ import annotations


class RocksMetricsException(Exception):
    """Base class for all rocksmetrics exceptions."""


class MetricNameError(RocksMetricsException, ValueError):
    """Malformed metric identity input (empty label, reserved characters, bad shard)."""


class ConfigError(RocksMetricsException):
    """Configuration-related issues (invalid environment values in strict mode)."""


class RegistrationError(RocksMetricsException):
    """An identity is already bound to a metric of an incompatible kind."""


__all__ = [
    "RocksMetricsException",
    "MetricNameError",
    "ConfigError",
    "RegistrationError",
]
