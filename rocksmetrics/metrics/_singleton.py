"""Central metrics context anchor.

Single source of truth for the process-wide RocksMetricsContext so code
importing through different paths shares one registry and one set of
throughput gauges.

Public helpers kept intentionally tiny to minimize import side-effects.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .context import RocksMetricsContext

CONTEXT_SINGLETON: RocksMetricsContext | None = None
_CONTEXT_LOCK = threading.Lock()


def get_context() -> RocksMetricsContext | None:
    return CONTEXT_SINGLETON


def set_context(ctx: RocksMetricsContext) -> RocksMetricsContext:
    """Publish ctx if no context is set yet; returns whichever context is published."""
    global CONTEXT_SINGLETON  # noqa: PLW0603
    if CONTEXT_SINGLETON is ctx:
        return CONTEXT_SINGLETON
    with _CONTEXT_LOCK:
        if CONTEXT_SINGLETON is None:
            CONTEXT_SINGLETON = ctx
    return CONTEXT_SINGLETON

def create_if_absent(factory: Callable[[], RocksMetricsContext]) -> RocksMetricsContext:
    """Atomically create and publish the context using factory() if absent.

    The factory is only invoked inside the lock when the context is absent.
    """
    global CONTEXT_SINGLETON  # noqa: PLW0603
    if CONTEXT_SINGLETON is not None:
        return CONTEXT_SINGLETON
    with _CONTEXT_LOCK:
        if CONTEXT_SINGLETON is None:
            CONTEXT_SINGLETON = factory()
        return CONTEXT_SINGLETON

def clear_context() -> None:
    """Forcefully clear the published context (test reset paths)."""
    global CONTEXT_SINGLETON  # noqa: PLW0603
    with _CONTEXT_LOCK:
        CONTEXT_SINGLETON = None

__all__ = ["get_context", "set_context", "create_if_absent", "clear_context"]
