# Utils module for rocksmetrics
from .env_flags import is_truthy_env
from .exceptions import ConfigError, MetricNameError, RegistrationError, RocksMetricsException
from .logging_utils import setup_logging

__all__ = [
    "is_truthy_env",
    "setup_logging",
    "RocksMetricsException", "MetricNameError", "ConfigError", "RegistrationError",
]
