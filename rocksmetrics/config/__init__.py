"""Configuration surface for rocksmetrics."""
from .settings import DEFAULT_MAX_LEVELS, DEFAULT_NAMESPACE, RocksMetricsSettings, load_settings

__all__ = ["RocksMetricsSettings", "load_settings", "DEFAULT_MAX_LEVELS", "DEFAULT_NAMESPACE"]
