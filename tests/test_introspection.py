import json

from rocksmetrics.engine.types import TableIdentity
from rocksmetrics.metrics.introspection import build_inventory, dump_inventory
from rocksmetrics.metrics.table_metrics import RocksDBTableMetrics
from rocksmetrics.metrics.testing import FakeStatistics


def test_inventory_lists_table_metrics(engine, registry):
    RocksDBTableMetrics(TableIdentity('ks1', 't1', 'cf-1'), [FakeStatistics()], engine=engine, registry=registry)
    inv = build_inventory(registry)
    assert len(inv) == 43 + 14
    scopes = [e['scope'] for e in inv]
    assert scopes == sorted(scopes)
    entry = next(e for e in inv if e['name'] == 'GetMicros')
    assert entry == {
        'name': 'GetMicros',
        'scope': 'ks1.t1_0',
        'kind': 'summary',
        'family': 'cassandra_rocksdb_get_micros',
        'mbean_name': 'org.apache.cassandra.metrics:type=Rocksdb,keyspace=ks1,scope=t1_0,name=GetMicros',
    }
    kinds = {e['name']: e['kind'] for e in build_inventory(registry, scope='ks1.t1')}
    assert kinds['IngestTime'] == 'histogram'
    assert kinds['RocksIterNew'] == 'counter'
    assert kinds['LiveDataSize'] == 'gauge'


def test_dump_inventory_writes_json(engine, registry, tmp_path):
    RocksDBTableMetrics(TableIdentity('ks1', 't1', 'cf-1'), [], engine=engine, registry=registry)
    target = tmp_path / 'inventory.json'
    text = dump_inventory(registry, target)
    assert json.loads(target.read_text(encoding='utf-8')) == json.loads(text)
    assert len(json.loads(text)) == 14
