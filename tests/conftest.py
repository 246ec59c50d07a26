"""Pytest configuration & fixtures for rocksmetrics.

Responsibilities:
1. Ensure project root on sys.path.
2. Provide a fresh registry per test plus fake engine / statistics collaborators.
3. Keep ROCKSMETRICS_* variables from the developer's shell out of tests.
"""
import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from rocksmetrics.engine.types import TableIdentity  # noqa: E402
from rocksmetrics.metrics import _singleton  # noqa: E402
from rocksmetrics.metrics.testing import FakeEngine, FakeStatistics, isolated_metrics_registry  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith('ROCKSMETRICS_'):
            monkeypatch.delenv(name, raising=False)
    yield
    _singleton.clear_context()


@pytest.fixture()
def registry():
    with isolated_metrics_registry() as reg:
        yield reg


@pytest.fixture()
def engine():
    return FakeEngine()


@pytest.fixture()
def table():
    return TableIdentity('ks1', 't1', table_id='cf-1')


@pytest.fixture()
def shard_stats():
    """Two shard statistics objects."""
    return [FakeStatistics(), FakeStatistics()]
