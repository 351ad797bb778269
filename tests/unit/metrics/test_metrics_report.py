from relayhook.adapters.memory_store import InMemoryStateStore
from relayhook.core.state import Keyspace
from relayhook.metrics.aggregator import MetricsAggregator
from relayhook.metrics.report import METRICS_SCHEMA, to_frame
from relayhook.policy.authorization import AuthorizationRegistry


def _aggregator() -> MetricsAggregator:
    store = InMemoryStateStore()
    auth = AuthorizationRegistry(Keyspace(store, "auth"))
    auth.bootstrap("0xrelayer")
    return MetricsAggregator(Keyspace(store, "metrics"), auth)


def test_empty_frame_keeps_schema():
    frame = to_frame(_aggregator())
    assert frame.height == 0
    assert dict(frame.schema) == METRICS_SCHEMA


def test_one_row_per_venue_sorted():
    metrics = _aggregator()
    metrics.on_swap_executed("v2")
    metrics.on_relay_decision("v1")
    metrics.on_swap_executed("v1")
    metrics.on_swap_executed("v1")
    metrics.report_performance("0xrelayer", "v1", 2**90)

    frame = to_frame(metrics)
    assert frame["venue"].to_list() == ["v1", "v2"]
    assert frame["relayed_count"].to_list() == [1, 0]
    assert frame["executed_count"].to_list() == [2, 1]
    assert frame["cumulative_reported_savings"].to_list() == [str(2**90), "0"]
    assert frame["relay_ratio"].to_list() == [0.5, 0.0]


def test_ratio_null_without_executions():
    metrics = _aggregator()
    metrics.on_relay_decision("v1")

    frame = to_frame(metrics)
    assert frame["relay_ratio"].to_list() == [None]
