"""Metrics introspection utilities.

Lightweight reflection over a MetricsRegistry for operators and tests: lists
registered identities without scraping the Prometheus exposition format.

Functions:
  build_inventory(registry, scope=None) -> list[dict]
  dump_inventory(registry, path=None) -> str
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .registry import MetricsRegistry, _exposition_type

logger = logging.getLogger(__name__)

__all__ = ["build_inventory", "dump_inventory"]


def build_inventory(registry: MetricsRegistry, scope: str | None = None) -> list[dict[str, Any]]:
    """Assemble one dict per registered identity, sorted by scope then name.

    Each entry contains: name, scope, kind, family, mbean_name.
    """
    inventory: list[dict[str, Any]] = []
    for name, metric in registry.items():
        if scope is not None and name.scope != scope:
            continue
        inventory.append(
            {
                "name": name.name,
                "scope": name.scope,
                "kind": _exposition_type(metric),
                "family": registry.family_name(name.name),
                "mbean_name": name.mbean_name,
            }
        )
    inventory.sort(key=lambda x: (x["scope"], x["name"]))
    return inventory


def dump_inventory(registry: MetricsRegistry, path: str | Path | None = None) -> str:
    """Serialize the inventory as JSON; also write it to path when given."""
    inv = build_inventory(registry)
    text = json.dumps(inv, indent=2)
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
        logger.info("metrics.introspection.dumped path=%s count=%d", path, len(inv),
                    extra={"event": "metrics.introspection.dumped"})
    return text
