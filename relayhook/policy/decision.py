from __future__ import annotations

import logging

from relayhook.policy.cost import FEE_DIVISOR, incentive_fee
from relayhook.ports.cost_estimator import CostEstimator
from relayhook.types.aliases import CostUnits, FeeUnits
from relayhook.types.types import MAX_FEE, CostEstimate, DecisionReason, RelayDecision, SwapRequest

logger = logging.getLogger(__name__)

_NO_SAVINGS = CostEstimate(should_consider=False, savings=0)


class RelayDecisionEngine:
    """
    Combines the cost estimate, the venue threshold and the user's opt-in into
    a relay decision plus the relayer incentive fee.

    Evaluation is total: an estimator failure is logged and treated as "no
    savings" so policy problems never block the swap itself.
    """

    def __init__(
        self,
        estimator: CostEstimator,
        *,
        fee_divisor: int = FEE_DIVISOR,
        max_fee: FeeUnits = MAX_FEE,
    ) -> None:
        self._estimator = estimator
        self._fee_divisor = fee_divisor
        self._max_fee = max_fee

    @property
    def estimator(self) -> CostEstimator:
        return self._estimator

    def estimate(self, request: SwapRequest) -> CostEstimate:
        try:
            estimate = self._estimator.estimate(request)
        except Exception as e:
            logger.error(f"Cost estimator failed, treating as no savings: {e}", exc_info=True)
            return _NO_SAVINGS
        if not estimate.should_consider or estimate.savings < 0:
            return CostEstimate(should_consider=estimate.should_consider, savings=0)
        return estimate

    def decide(self, request: SwapRequest, threshold: CostUnits) -> tuple[bool, CostUnits]:
        """Cost-only decision: (savings > threshold, savings). Opt-in is not applied here."""
        savings = self.estimate(request).savings
        return savings > threshold, savings

    def incentive_fee(self, savings: CostUnits) -> FeeUnits:
        return incentive_fee(savings, divisor=self._fee_divisor, max_fee=self._max_fee)

    def evaluate(self, request: SwapRequest, threshold: CostUnits) -> RelayDecision:
        estimate = self.estimate(request)
        savings = estimate.savings

        if not estimate.should_consider:
            reason = DecisionReason.BELOW_UNIT
        elif savings <= threshold:
            reason = DecisionReason.BELOW_THRESHOLD
        elif not request.opt_in:
            reason = DecisionReason.OPTED_OUT
        else:
            reason = DecisionReason.RELAY

        should_relay = reason == DecisionReason.RELAY
        decision = RelayDecision(
            should_relay=should_relay,
            estimated_savings=savings,
            fee=self.incentive_fee(savings) if should_relay else 0,
            threshold=threshold,
            reason=reason,
        )
        logger.debug(
            f"Relay decision for {request.requester}: {reason.value} "
            f"(savings={savings}, threshold={threshold}, fee={decision.fee})"
        )
        return decision
