"""
Boundary adapter between the host's swap lifecycle and the relay policy.

The host calls before_swap / after_swap around every swap and the admin
methods for policy changes. Each call is one request: all state mutations run
inside a single store transaction and all notifications are staged, so a
failing request (e.g. Unauthorized) leaves neither state changes nor
notifications behind.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import polars as pl

from relayhook.adapters.clock import SystemClock
from relayhook.adapters.cost_meter import StaticCostMeter
from relayhook.adapters.journal import NotificationJournal
from relayhook.adapters.json_store import JsonFileStateStore
from relayhook.adapters.memory_store import InMemoryStateStore
from relayhook.adapters.telemetry.jsonl import JsonlTelemetry
from relayhook.config.configs import FulfillmentMode, HookConfig
from relayhook.core.channel import EventChannel, Handler
from relayhook.core.state import (
    NS_AUTH,
    NS_FULFILLMENT,
    NS_META,
    NS_METRICS,
    NS_PENDING,
    NS_THRESHOLDS,
    Keyspace,
)
from relayhook.errors.errors import Unauthorized
from relayhook.hook.payload import decode_opt_in
from relayhook.metrics.aggregator import MetricsAggregator
from relayhook.metrics.report import to_frame
from relayhook.policy.authorization import AuthorizationRegistry
from relayhook.policy.cost import ConstantCostEstimator, magnitude_of
from relayhook.policy.decision import RelayDecisionEngine
from relayhook.policy.pending import PendingRequestTracker, StatelessRelayDetector
from relayhook.policy.thresholds import ThresholdPolicy
from relayhook.ports.clock import Clock
from relayhook.ports.cost_estimator import CostEstimator
from relayhook.ports.cost_meter import CostMeter
from relayhook.ports.state_store import StateStore
from relayhook.ports.telemetry import Telemetry
from relayhook.types.aliases import CostUnits, Principal, VenueId
from relayhook.types.topics import T_RELAY_REQUESTED, T_SWAP_COMPLETED
from relayhook.types.types import (
    ZERO_DELTA,
    AfterSwapResult,
    BalanceDelta,
    BeforeSwapResult,
    HookAck,
    HookPermissions,
    PendingEntry,
    PendingState,
    RelayRequested,
    SwapCompleted,
    SwapParams,
    SwapRequest,
    VenueMetrics,
)

logger = logging.getLogger(__name__)


class RelayHook:
    """
    Pre-/post-swap hook deciding which swaps are deferred to an authorized relayer.

    Collaborators are injectable (state store, channel, cost estimator, clock,
    cost meter, telemetry); anything not injected is built from the config.
    """

    def __init__(
        self,
        config: HookConfig,
        *,
        store: Optional[StateStore] = None,
        channel: Optional[EventChannel] = None,
        estimator: Optional[CostEstimator] = None,
        clock: Optional[Clock] = None,
        cost_meter: Optional[CostMeter] = None,
        telemetry: Optional[Telemetry] = None,
    ) -> None:
        self._config = config
        self._clock = clock or SystemClock()
        self._store = store if store is not None else self._build_store(config)
        self._channel = channel or EventChannel(clock=self._clock)
        self._cost_meter = cost_meter or StaticCostMeter(config.cost_budget)
        self._telemetry = telemetry
        if self._telemetry is None and config.telemetry_path is not None:
            self._telemetry = JsonlTelemetry(
                hook_id=config.hook_id, sink_path=config.telemetry_path, clock=self._clock
            )

        if estimator is None:
            estimator = ConstantCostEstimator(
                unit_size=config.cost_model.unit_size,
                standard_cost=config.cost_model.standard_cost,
                relayed_cost=config.cost_model.relayed_cost,
            )

        # components see only their own keyspace
        self._meta = Keyspace(self._store, NS_META)
        self._auth = AuthorizationRegistry(Keyspace(self._store, NS_AUTH))
        self._thresholds = ThresholdPolicy(Keyspace(self._store, NS_THRESHOLDS), self._auth)
        self._engine = RelayDecisionEngine(
            estimator, fee_divisor=config.fee.divisor, max_fee=config.fee.max_fee
        )
        self._pending = PendingRequestTracker(
            Keyspace(self._store, NS_PENDING),
            Keyspace(self._store, NS_FULFILLMENT),
            self._auth,
            strict_matching=config.strict_fulfillment,
        )
        self._stateless = StatelessRelayDetector(self._auth)
        self._metrics = MetricsAggregator(Keyspace(self._store, NS_METRICS), self._auth)

        if config.journal_path is not None:
            NotificationJournal(config.journal_path).attach(self._channel)

        if config.fulfillment_mode == FulfillmentMode.STATELESS:
            logger.warning(
                "Stateless fulfillment mode: any swap by an authorized principal is reported as relayed"
            )
        self._bootstrap()

    @staticmethod
    def _build_store(config: HookConfig) -> StateStore:
        if config.state_path is not None:
            return JsonFileStateStore(config.state_path)
        return InMemoryStateStore()

    def _bootstrap(self) -> None:
        with self._store.transaction():
            if self._meta.get("initialized", False):
                logger.info(f"Resuming hook state (owner={self._meta.get('owner')})")
                return
            self._auth.bootstrap(self._config.owner)
            self._thresholds.initialize(self._config.default_threshold)
            self._meta.put("owner", self._config.owner)
            self._meta.put("initialized", True)
        self._emit("hook_initialized", owner=self._config.owner)

    # --- request scope ---

    @contextmanager
    def _request(self, operation: str) -> Iterator[None]:
        try:
            with self._channel.staged(), self._store.transaction():
                yield
        except Unauthorized as exc:
            self._emit("request_rejected", operation=operation, caller=exc.caller)
            raise

    def _emit(self, event: str, **fields: Any) -> None:
        """Best-effort: a failing telemetry sink is logged, never raised to the host."""
        logger.debug(event, extra={"event": event, **fields})
        if self._telemetry is None:
            return
        try:
            self._telemetry.log(event, **fields)
        except Exception as e:
            logger.error(f"Telemetry sink failed on {event}: {e}", exc_info=True)

    def _result(self, fee: int = 0) -> BeforeSwapResult:
        return BeforeSwapResult(ack=HookAck.BEFORE_SWAP, delta=ZERO_DELTA, fee=fee)

    @property
    def _stateful(self) -> bool:
        return self._config.fulfillment_mode == FulfillmentMode.STATEFUL

    # --- lifecycle hooks ---

    def before_swap(
        self,
        sender: Principal,
        venue: VenueId,
        params: SwapParams,
        hook_data: Optional[bytes] = None,
    ) -> BeforeSwapResult:
        request = SwapRequest.from_params(sender, params, decode_opt_in(hook_data))

        with self._request("before_swap"):
            if self._stateful:
                # a tag only lives between one before_swap and its after_swap
                stale = self._pending.take_fulfillment(venue)
                if stale is not None:
                    logger.warning(f"Discarding stale fulfillment tag on {venue} ({stale.originator})")

                if self._pending.try_fulfill(venue, sender, request) is not None:
                    return self._result()
            elif self._auth.is_authorized(sender):
                # stateless: no slot to consult, an authorized sender is the relayer
                # and is never re-evaluated
                return self._result()

            threshold = self._thresholds.effective_threshold(venue)
            decision = self._engine.evaluate(request, threshold)
            if not decision.should_relay:
                return self._result()

            if self._stateful:
                self._pending.open(venue, request)
            self._metrics.on_relay_decision(venue)
            self._channel.publish(
                T_RELAY_REQUESTED,
                RelayRequested(
                    originator=sender,
                    venue=venue,
                    amount=request.amount,
                    zero_for_one=request.zero_for_one,
                    estimated_savings=decision.estimated_savings,
                ),
            )

        # emitted only once the request has committed
        self._emit(
            "relay_requested",
            venue=venue,
            originator=sender,
            estimated_savings=decision.estimated_savings,
            fee=decision.fee,
        )
        return self._result(decision.fee)

    def after_swap(
        self,
        sender: Principal,
        venue: VenueId,
        params: SwapParams,
        delta: BalanceDelta,
        hook_data: Optional[bytes] = None,
    ) -> AfterSwapResult:
        with self._request("after_swap"):
            self._metrics.on_swap_executed(venue)

            if self._stateful:
                tag = self._pending.take_fulfillment(venue)
                was_relayed = tag is not None
                originator = tag.originator if tag is not None else sender
            else:
                was_relayed = self._stateless.was_relayed(sender)
                originator = sender

            completed = SwapCompleted(
                originator=originator,
                venue=venue,
                amount=params.amount_specified,
                amount_out=magnitude_of(delta.output_side(params.zero_for_one)),
                was_relayed=was_relayed,
                cost_remaining=self._cost_meter.remaining(),
            )
            self._channel.publish(T_SWAP_COMPLETED, completed)

        self._emit("swap_completed", venue=venue, originator=originator, was_relayed=was_relayed)
        return AfterSwapResult(ack=HookAck.AFTER_SWAP)

    # --- admin surface (authorized only) ---

    def set_venue_threshold(self, caller: Principal, venue: VenueId, value: CostUnits) -> None:
        with self._request("set_venue_threshold"):
            self._thresholds.set_venue_threshold(caller, venue, value)
        self._emit("venue_threshold_set", caller=caller, venue=venue, value=value)

    def set_default_threshold(self, caller: Principal, value: CostUnits) -> None:
        with self._request("set_default_threshold"):
            self._thresholds.set_default(caller, value)
        self._emit("default_threshold_set", caller=caller, value=value)

    def set_authorization(self, caller: Principal, target: Principal, value: bool) -> None:
        with self._request("set_authorization"):
            self._auth.set_authorization(caller, target, value)
        self._emit("authorization_set", caller=caller, target=target, value=bool(value))

    def report_performance(
        self, caller: Principal, venue: VenueId, actual_savings: CostUnits
    ) -> None:
        with self._request("report_performance"):
            self._metrics.report_performance(caller, venue, actual_savings)
        self._emit("performance_reported", caller=caller, venue=venue, actual_savings=actual_savings)

    # --- read surface ---

    def get_metrics(self, venue: VenueId) -> VenueMetrics:
        return self._metrics.snapshot(venue)

    def get_threshold(self, venue: VenueId) -> CostUnits:
        return self._thresholds.effective_threshold(venue)

    def is_authorized(self, principal: Principal) -> bool:
        return self._auth.is_authorized(principal)

    def get_pending(self, venue: VenueId) -> Optional[PendingEntry]:
        return self._pending.peek(venue)

    def pending_state(self, venue: VenueId) -> PendingState:
        return self._pending.state(venue)

    def metrics_frame(self) -> pl.DataFrame:
        return to_frame(self._metrics)

    @staticmethod
    def hook_permissions() -> HookPermissions:
        return HookPermissions()

    # --- notifications ---

    @property
    def channel(self) -> EventChannel:
        return self._channel

    def subscribe(self, topic: str, handler: Handler) -> None:
        self._channel.subscribe(topic, handler)
