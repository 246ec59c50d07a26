"""Environment flag and value helpers.

Consolidates the common pattern of interpreting environment variables as boolean
feature flags using the canonical truthy set {"1","true","yes","on"} (case-insensitive),
plus typed getters that fall back to a default when a variable is unset or blank.

Usage examples:
    from rocksmetrics.utils.env_flags import is_truthy_env, get_int
    if is_truthy_env('ROCKSMETRICS_STRICT'):
        ...
    levels = get_int('ROCKSMETRICS_MAX_LEVELS', 7)

The typed getters raise ValueError on malformed values; callers decide whether
that is fatal (see rocksmetrics.config.settings).
"""
from __future__ import annotations

import os

TRUTHY_SET: set[str] = {"1","true","yes","on"}


def is_truthy(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in TRUTHY_SET

def is_truthy_env(name: str, default: str | None = None) -> bool:
    return is_truthy(os.getenv(name, default or ''))

def get_str(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip()

def get_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or str(v).strip() == "":
        return default
    return int(str(v).strip())

def get_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None or str(v).strip() == "":
        return default
    return float(str(v).strip())

__all__ = [
    'TRUTHY_SET',
    'is_truthy',
    'is_truthy_env',
    'get_str',
    'get_int',
    'get_float',
]
