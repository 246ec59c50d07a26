import pytest
from prometheus_client import CollectorRegistry

from rocksmetrics.engine.types import HistogramData, HistogramType, TickerType
from rocksmetrics.metrics.naming import RocksMetricNameFactory
from rocksmetrics.metrics.registry import MetricsRegistry, snake_case, split_level
from rocksmetrics.metrics.sources import Counter, Gauge, Histogram, StatsCounter, StatsHistogram
from rocksmetrics.metrics.testing import FakeStatistics
from rocksmetrics.utils.exceptions import RegistrationError

F = RocksMetricNameFactory('ks1', 't1')


@pytest.mark.parametrize('label,expected', [
    ('GetMicros', 'get_micros'),
    ('WALFileSyncMicros', 'wal_file_sync_micros'),
    ('DBMutexWaitMicros', 'db_mutex_wait_micros'),
    ('TableOpenIOMicros', 'table_open_io_micros'),
    ('SSTableCountPerLevel.3', 'ss_table_count_per_level_3'),
    ('RocksdbOutgoingThroughput', 'rocksdb_outgoing_throughput'),
    ('StallL0SlowdownCount', 'stall_l0_slowdown_count'),
])
def test_snake_case(label, expected):
    assert snake_case(label) == expected


def test_register_returns_existing_on_duplicate(registry):
    name = F.create_metric_name('LiveDataSize')
    first = registry.register(name, Gauge(lambda: 1))
    again = registry.register(F.create_metric_name('LiveDataSize'), Gauge(lambda: 2))
    assert again is first, 'Expected duplicate registration to return original metric'
    assert again.get_value() == 1
    assert len(registry) == 1


def test_counter_and_histogram_get_or_create(registry):
    c1 = registry.counter(F.create_metric_name('RocksIterSeek'))
    c2 = registry.counter(F.create_metric_name('RocksIterSeek'))
    assert c1 is c2
    h1 = registry.histogram(F.create_metric_name('IngestTime'), biased=True)
    h2 = registry.histogram(F.create_metric_name('IngestTime'), biased=True)
    assert h1 is h2 and h1.biased


def test_kind_conflict_raises(registry):
    name = F.create_metric_name('IngestTime')
    registry.histogram(name)
    with pytest.raises(RegistrationError):
        registry.counter(name)
    with pytest.raises(RegistrationError):
        registry.register(name, Gauge(lambda: 0))


def test_family_kind_conflict_across_scopes(registry):
    registry.counter(F.create_metric_name('Shared'))
    other = RocksMetricNameFactory('ks1', 't2').create_metric_name('Shared')
    with pytest.raises(RegistrationError):
        registry.register(other, Gauge(lambda: 0))


def test_unsupported_metric_object(registry):
    with pytest.raises(RegistrationError):
        registry.register(F.create_metric_name('Thing'), object())


def test_names_and_scope_filter(registry):
    registry.counter(F.create_metric_name('A'))
    registry.counter(F.create_sharded_metric_name('A', 0))
    registry.counter(F.create_sharded_metric_name('A', 1))
    assert len(registry.names()) == 3
    assert [n.scope for n in registry.names('ks1.t1_1')] == ['ks1.t1_1']
    assert F.create_metric_name('A') in registry
    assert registry.get(F.create_metric_name('Missing')) is None


def test_remove(registry):
    name = F.create_metric_name('A')
    registry.counter(name)
    assert registry.remove(name) is True
    assert registry.remove(name) is False
    assert name not in registry
    # family type freed once the last member is gone
    registry.register(name, Gauge(lambda: 5))


def test_exposition_counter_and_gauge(registry):
    c = registry.counter(F.create_metric_name('RocksIterSeek'))
    c.inc()
    c.inc(2)
    registry.register(F.create_metric_name('LiveDataSize'), Gauge(lambda: 1234))
    labels = {'keyspace': 'ks1', 'scope': 't1'}
    assert registry.get_sample_value('cassandra_rocksdb_rocks_iter_seek_total', labels) == 3.0
    assert registry.get_sample_value('cassandra_rocksdb_live_data_size', labels) == 1234.0


def test_exposition_writable_histogram(registry):
    h = registry.histogram(F.create_metric_name('IngestTime'), biased=True)
    h.update(40)
    h.update(2_000)
    labels = {'keyspace': 'ks1', 'scope': 't1'}
    assert registry.get_sample_value('cassandra_rocksdb_ingest_time_count', labels) == 2.0
    assert registry.get_sample_value('cassandra_rocksdb_ingest_time_sum', labels) == 2040.0
    assert registry.get_sample_value('cassandra_rocksdb_ingest_time_bucket', dict(labels, le='50.0')) == 1.0
    assert h.get_count() == 2
    assert h.get_sum() == 2040.0


def test_exposition_stats_sources(registry):
    stats = FakeStatistics()
    stats.histograms[HistogramType.DB_GET] = HistogramData(
        median=10.0, percentile95=40.0, percentile99=90.0, count=7, sum=120.0)
    stats.tickers[TickerType.BLOCK_CACHE_HIT] = 55
    registry.register(F.create_sharded_metric_name('GetMicros', 0), StatsHistogram(stats, HistogramType.DB_GET))
    registry.register(F.create_sharded_metric_name('BlockCacheHit', 0), StatsCounter(stats, TickerType.BLOCK_CACHE_HIT))
    labels = {'keyspace': 'ks1', 'scope': 't1_0'}
    assert registry.get_sample_value('cassandra_rocksdb_get_micros_count', labels) == 7.0
    assert registry.get_sample_value('cassandra_rocksdb_get_micros_sum', labels) == 120.0
    assert registry.get_sample_value('cassandra_rocksdb_get_micros', dict(labels, quantile='0.99')) == 90.0
    assert registry.get_sample_value('cassandra_rocksdb_block_cache_hit_total', labels) == 55.0


def test_source_read_failure_skips_only_that_metric(registry):
    class Broken:
        def get_histogram_data(self, _t):
            raise RuntimeError('engine closed')

        def get_ticker_count(self, _t):
            raise RuntimeError('engine closed')

    registry.register(F.create_sharded_metric_name('MemtableHit', 0), StatsCounter(Broken(), TickerType.MEMTABLE_HIT))
    ok = FakeStatistics()
    ok.tickers[TickerType.MEMTABLE_HIT] = 9
    registry.register(F.create_sharded_metric_name('MemtableHit', 1), StatsCounter(ok, TickerType.MEMTABLE_HIT))
    assert registry.get_sample_value('cassandra_rocksdb_memtable_hit_total', {'keyspace': 'ks1', 'scope': 't1_0'}) is None
    assert registry.get_sample_value('cassandra_rocksdb_memtable_hit_total', {'keyspace': 'ks1', 'scope': 't1_1'}) == 9.0


def test_handles_are_plain_objects():
    c = Counter()
    c.inc(4)
    assert c.get_count() == 4
    h = Histogram()
    assert h.get_count() == 0
    assert h.buckets()[-1][0] == '+Inf'


def test_level_suffix_split():
    assert split_level('SSTableCountPerLevel.3') == ('SSTableCountPerLevel', '3')
    assert split_level('GetMicros') == ('GetMicros', None)
    assert split_level('Odd.name') == ('Odd.name', None)


def test_level_gauges_share_one_family(registry):
    for level in range(3):
        registry.register(F.create_metric_name(f'SSTableCountPerLevel.{level}'), Gauge(lambda lv=level: lv * 10))
    assert registry.family_name('SSTableCountPerLevel.2') == 'cassandra_rocksdb_ss_table_count_per_level'
    families = [m for m in registry.collector_registry.collect() if m.name.endswith('per_level')]
    assert len(families) == 1
    assert sorted(s.labels['level'] for s in families[0].samples) == ['0', '1', '2']
    labels = {'keyspace': 'ks1', 'scope': 't1', 'level': '2'}
    assert registry.get_sample_value('cassandra_rocksdb_ss_table_count_per_level', labels) == 20.0


def test_level_and_plain_label_cannot_share_family(registry):
    registry.register(F.create_metric_name('SSTableCountPerLevel.0'), Gauge(lambda: 0))
    with pytest.raises(RegistrationError):
        registry.register(F.create_metric_name('SSTableCountPerLevel'), Gauge(lambda: 0))


def test_family_type_held_until_last_member_removed(registry):
    first = F.create_sharded_metric_name('MemtableHit', 0)
    second = F.create_sharded_metric_name('MemtableHit', 1)
    registry.counter(first)
    registry.counter(second)
    registry.remove(first)
    with pytest.raises(RegistrationError):
        registry.register(first, Gauge(lambda: 0))
    registry.remove(second)
    assert registry.register(first, Gauge(lambda: 3)).get_value() == 3


def test_two_registries_on_one_collector_registry():
    shared = CollectorRegistry()
    first = MetricsRegistry(collector_registry=shared)
    first.register(F.create_metric_name('LiveDataSize'), Gauge(lambda: 1))
    second = MetricsRegistry(collector_registry=shared)
    assert second.gauge_failures is first.gauge_failures
    second.register(F.create_metric_name('LiveDataSize'), Gauge(lambda: 2))
    labels = {'keyspace': 'ks1', 'scope': 't1'}
    assert shared.get_sample_value('cassandra_rocksdb_live_data_size', labels) == 2.0
    names = [m.name for m in shared.collect()]
    assert len(names) == len(set(names))
    # a different namespace keeps its own collector alongside
    other = MetricsRegistry('node_rocks', collector_registry=shared)
    other.register(F.create_metric_name('LiveDataSize'), Gauge(lambda: 5))
    assert shared.get_sample_value('node_rocks_live_data_size', labels) == 5.0
    assert shared.get_sample_value('cassandra_rocksdb_live_data_size', labels) == 2.0
