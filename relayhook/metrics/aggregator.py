from __future__ import annotations

import logging
from dataclasses import replace

from relayhook.core.state import Keyspace
from relayhook.policy.authorization import AuthorizationRegistry
from relayhook.types.aliases import CostUnits, Principal, VenueId
from relayhook.types.types import VenueMetrics, check_uint

logger = logging.getLogger(__name__)


class MetricsAggregator:
    """
    Per-venue counters:
    - relayed_count: successful IDLE -> PENDING transitions
    - executed_count: completed swaps, relayed or not
    - cumulative_reported_savings: sum of relayer-reported savings (trusted, unbounded)

    All three only ever grow; there is no reset operation.
    """

    def __init__(self, keyspace: Keyspace, auth: AuthorizationRegistry) -> None:
        self._keyspace = keyspace
        self._auth = auth

    def snapshot(self, venue: VenueId) -> VenueMetrics:
        record = self._keyspace.get(venue)
        if record is None:
            return VenueMetrics()
        return VenueMetrics.from_record(record)

    def venues(self) -> list[VenueId]:
        return self._keyspace.keys()

    def on_relay_decision(self, venue: VenueId) -> VenueMetrics:
        current = self.snapshot(venue)
        return self._save(venue, replace(current, relayed_count=current.relayed_count + 1))

    def on_swap_executed(self, venue: VenueId) -> VenueMetrics:
        current = self.snapshot(venue)
        return self._save(venue, replace(current, executed_count=current.executed_count + 1))

    def report_performance(
        self, caller: Principal, venue: VenueId, actual_savings: CostUnits
    ) -> VenueMetrics:
        self._auth.require(caller, "report_performance")
        check_uint("actual_savings", actual_savings)
        current = self.snapshot(venue)
        updated = self._save(
            venue,
            replace(
                current,
                cumulative_reported_savings=current.cumulative_reported_savings + actual_savings,
            ),
        )
        logger.info(
            "performance_reported",
            extra={
                "event": "performance_reported",
                "venue": venue,
                "caller": caller,
                "actual_savings": actual_savings,
            },
        )
        return updated

    def _save(self, venue: VenueId, metrics: VenueMetrics) -> VenueMetrics:
        self._keyspace.put(venue, metrics.to_record())
        return metrics
