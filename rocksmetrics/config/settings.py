"""Environment-driven settings.

All knobs are read from ROCKSMETRICS_* environment variables, optionally after
loading a .env file with python-dotenv. Malformed values fall back to the
default with a warning, or raise ConfigError when ROCKSMETRICS_STRICT is set.

| env                                     | field                     | default           |
|-----------------------------------------|---------------------------|-------------------|
| ROCKSMETRICS_MAX_LEVELS                 | max_levels                | 7                 |
| ROCKSMETRICS_NAMESPACE                  | namespace                 | cassandra_rocksdb |
| ROCKSMETRICS_THROUGHPUT_WINDOW_SECONDS  | throughput_window_seconds | 10.0              |
| ROCKSMETRICS_STRICT                     | strict                    | false             |
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

from ..utils.env_flags import get_float, get_int, get_str, is_truthy_env
from ..utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LEVELS = 7
DEFAULT_NAMESPACE = "cassandra_rocksdb"
DEFAULT_THROUGHPUT_WINDOW_SECONDS = 10.0

_NAMESPACE_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


@dataclass(frozen=True)
class RocksMetricsSettings:
    max_levels: int = DEFAULT_MAX_LEVELS
    namespace: str = DEFAULT_NAMESPACE
    throughput_window_seconds: float = DEFAULT_THROUGHPUT_WINDOW_SECONDS
    strict: bool = False

    def __post_init__(self) -> None:
        if self.max_levels < 1:
            raise ConfigError(f"max_levels must be >= 1 (got {self.max_levels})")
        if not _NAMESPACE_RE.match(self.namespace):
            raise ConfigError(f"namespace must be a metric-safe identifier (got {self.namespace!r})")
        if self.throughput_window_seconds <= 0:
            raise ConfigError(f"throughput_window_seconds must be > 0 (got {self.throughput_window_seconds})")


def _read(name: str, getter: Callable[[str, Any], Any], default: Any,
          validate: Callable[[Any], bool], strict: bool) -> Any:
    try:
        value = getter(name, default)
    except ValueError as e:
        if strict:
            raise ConfigError(f"{name}: {e}") from e
        logger.warning("config.invalid_value name=%s error=%s; using default %r", name, e, default)
        return default
    if not validate(value):
        if strict:
            raise ConfigError(f"{name}: invalid value {value!r}")
        logger.warning("config.invalid_value name=%s value=%r; using default %r", name, value, default)
        return default
    return value


def load_settings(env_file: str | None = None) -> RocksMetricsSettings:
    """Build settings from the environment.

    If env_file is given it is loaded first (existing variables win, matching
    python-dotenv's default of not overriding the process environment).
    """
    if env_file:
        if not load_dotenv(env_file, override=False):
            logger.debug("config.env_file_missing path=%s", env_file)
    strict = is_truthy_env('ROCKSMETRICS_STRICT')
    max_levels = _read('ROCKSMETRICS_MAX_LEVELS', get_int, DEFAULT_MAX_LEVELS,
                       lambda v: v >= 1, strict)
    namespace = _read('ROCKSMETRICS_NAMESPACE', get_str, DEFAULT_NAMESPACE,
                      lambda v: bool(_NAMESPACE_RE.match(v)), strict)
    window = _read('ROCKSMETRICS_THROUGHPUT_WINDOW_SECONDS', get_float, DEFAULT_THROUGHPUT_WINDOW_SECONDS,
                   lambda v: v > 0, strict)
    settings = RocksMetricsSettings(
        max_levels=max_levels,
        namespace=namespace,
        throughput_window_seconds=window,
        strict=strict,
    )
    logger.debug("config.loaded %s", settings)
    return settings

__all__ = ["RocksMetricsSettings", "load_settings", "DEFAULT_MAX_LEVELS", "DEFAULT_NAMESPACE",
           "DEFAULT_THROUGHPUT_WINDOW_SECONDS"]
