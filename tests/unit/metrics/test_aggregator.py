import pytest

from relayhook.adapters.memory_store import InMemoryStateStore
from relayhook.core.state import Keyspace
from relayhook.errors.errors import Unauthorized
from relayhook.metrics.aggregator import MetricsAggregator
from relayhook.policy.authorization import AuthorizationRegistry
from relayhook.types.types import VenueMetrics


@pytest.fixture
def metrics() -> MetricsAggregator:
    store = InMemoryStateStore()
    auth = AuthorizationRegistry(Keyspace(store, "auth"))
    auth.bootstrap("0xrelayer")
    return MetricsAggregator(Keyspace(store, "metrics"), auth)


def test_unknown_venue_snapshot_is_zero(metrics):
    assert metrics.snapshot("v1") == VenueMetrics(0, 0, 0)
    assert metrics.venues() == []


def test_counters_increment_independently(metrics):
    metrics.on_relay_decision("v1")
    metrics.on_swap_executed("v1")
    metrics.on_swap_executed("v1")
    metrics.on_swap_executed("v2")

    assert metrics.snapshot("v1") == VenueMetrics(
        relayed_count=1, cumulative_reported_savings=0, executed_count=2
    )
    assert metrics.snapshot("v2").executed_count == 1
    assert metrics.venues() == ["v1", "v2"]


def test_report_performance_accumulates(metrics):
    metrics.report_performance("0xrelayer", "v1", 1_000)
    updated = metrics.report_performance("0xrelayer", "v1", 2_000)

    assert updated.cumulative_reported_savings == 3_000
    assert metrics.snapshot("v1").cumulative_reported_savings == 3_000


def test_report_performance_zero_is_allowed(metrics):
    metrics.report_performance("0xrelayer", "v1", 0)
    assert metrics.snapshot("v1").cumulative_reported_savings == 0
    assert metrics.venues() == ["v1"]


def test_report_performance_requires_authorization(metrics):
    with pytest.raises(Unauthorized) as exc_info:
        metrics.report_performance("0xmallory", "v1", 1_000)
    assert exc_info.value.operation == "report_performance"
    assert metrics.snapshot("v1") == VenueMetrics()


def test_report_performance_rejects_negative(metrics):
    with pytest.raises(ValueError):
        metrics.report_performance("0xrelayer", "v1", -5)
