import os

import pytest

from rocksmetrics.config.settings import RocksMetricsSettings, load_settings
from rocksmetrics.utils.exceptions import ConfigError


def test_defaults():
    s = load_settings()
    assert s == RocksMetricsSettings()
    assert s.max_levels == 7
    assert s.namespace == 'cassandra_rocksdb'
    assert s.throughput_window_seconds == 10.0
    assert s.strict is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv('ROCKSMETRICS_MAX_LEVELS', '5')
    monkeypatch.setenv('ROCKSMETRICS_NAMESPACE', 'node_rocks')
    monkeypatch.setenv('ROCKSMETRICS_THROUGHPUT_WINDOW_SECONDS', '2.5')
    s = load_settings()
    assert (s.max_levels, s.namespace, s.throughput_window_seconds) == (5, 'node_rocks', 2.5)


def test_invalid_values_fall_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv('ROCKSMETRICS_MAX_LEVELS', 'seven')
    monkeypatch.setenv('ROCKSMETRICS_NAMESPACE', 'bad-name')
    monkeypatch.setenv('ROCKSMETRICS_THROUGHPUT_WINDOW_SECONDS', '-1')
    s = load_settings()
    assert s == RocksMetricsSettings()
    assert sum('config.invalid_value' in r.getMessage() for r in caplog.records) == 3


@pytest.mark.parametrize('var,value', [
    ('ROCKSMETRICS_MAX_LEVELS', 'seven'),
    ('ROCKSMETRICS_MAX_LEVELS', '0'),
    ('ROCKSMETRICS_NAMESPACE', '9lives'),
])
def test_strict_mode_raises(monkeypatch, var, value):
    monkeypatch.setenv('ROCKSMETRICS_STRICT', '1')
    monkeypatch.setenv(var, value)
    with pytest.raises(ConfigError):
        load_settings()


def test_env_file(tmp_path):
    env = tmp_path / '.env'
    env.write_text('ROCKSMETRICS_MAX_LEVELS=3\n', encoding='utf-8')
    try:
        assert load_settings(str(env)).max_levels == 3
    finally:
        # load_dotenv writes os.environ directly
        os.environ.pop('ROCKSMETRICS_MAX_LEVELS', None)


def test_process_env_beats_env_file(tmp_path, monkeypatch):
    env = tmp_path / '.env'
    env.write_text('ROCKSMETRICS_MAX_LEVELS=3\n', encoding='utf-8')
    monkeypatch.setenv('ROCKSMETRICS_MAX_LEVELS', '9')
    assert load_settings(str(env)).max_levels == 9


def test_dataclass_validation():
    with pytest.raises(ConfigError):
        RocksMetricsSettings(max_levels=0)
    with pytest.raises(ConfigError):
        RocksMetricsSettings(namespace='a b')
