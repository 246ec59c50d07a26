import logging

from prometheus_client import CollectorRegistry, Counter

from rocksmetrics.metrics.safe_gauge import safe_gauge


def test_passes_value_through():
    read = safe_gauge(lambda: 42)
    assert read() == 42


def test_failure_reads_default_and_logs_warning(caplog):
    def boom():
        raise RuntimeError('no handle')

    read = safe_gauge(boom, message='Failed to get live data size', name='g1')
    with caplog.at_level(logging.WARNING, logger='rocksmetrics.metrics.safe_gauge'):
        assert read() == 0
        assert read() == 0
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert 'Failed to get live data size' in warnings[0].getMessage()
    assert warnings[0].exc_info is not None


def test_custom_default():
    read = safe_gauge(lambda: 1 / 0, default=-1)
    assert read() == -1


def test_failures_counter_incremented():
    reg = CollectorRegistry()
    failures = Counter('t_gauge_failures', 'doc', ['gauge'], registry=reg)
    read = safe_gauge(lambda: [][0], name='level3', failures=failures)
    read()
    read()
    assert reg.get_sample_value('t_gauge_failures_total', {'gauge': 'level3'}) == 2.0


def test_broken_failures_counter_is_ignored():
    class Bad:
        def labels(self, *_a):
            raise ValueError('bad labels')

    read = safe_gauge(lambda: {}['x'], failures=Bad())
    assert read() == 0
