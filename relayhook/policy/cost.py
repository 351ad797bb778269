from __future__ import annotations

from dataclasses import dataclass

from relayhook.types.aliases import CostUnits, FeeUnits
from relayhook.types.types import MAX_FEE, MAX_POSITIVE, MIN_SIGNED, CostEstimate, SwapRequest

ONE_UNIT = 10**18  # one whole unit of the venue's base currency (18 decimals)
STANDARD_COST: CostUnits = 150_000
RELAYED_COST: CostUnits = 90_000
FEE_DIVISOR = 100

# --- Utils ---


def magnitude_of(amount: int) -> int:
    """
    Absolute value of a signed 256-bit amount.
    MIN_SIGNED has no positive counterpart in the signed range, so it is mapped
    to MAX_POSITIVE + 1 explicitly instead of being negated.
    """
    if amount == MIN_SIGNED:
        return MAX_POSITIVE + 1
    return -amount if amount < 0 else amount


def incentive_fee(
    savings: CostUnits, *, divisor: int = FEE_DIVISOR, max_fee: FeeUnits = MAX_FEE
) -> FeeUnits:
    """
    Fee handed to the relayer: 1/divisor of the savings, saturating at max_fee.
    Total: never raises, negative savings pay nothing.
    """
    if savings <= 0:
        return 0
    return min(savings // divisor, max_fee)


# --- Implementations ---


@dataclass(frozen=True)
class ConstantCostEstimator:
    """
    Fixed-figure cost model: any swap larger than one unit is assumed to cost
    standard_cost when executed directly and relayed_cost when batched.
    Example: ConstantCostEstimator()  # savings = 150_000 - 90_000 = 60_000
    """

    unit_size: int = ONE_UNIT
    standard_cost: CostUnits = STANDARD_COST
    relayed_cost: CostUnits = RELAYED_COST

    def __post_init__(self) -> None:
        if self.unit_size < 0:
            raise ValueError("unit_size must be >= 0.")
        if self.standard_cost < 0 or self.relayed_cost < 0:
            raise ValueError("costs must be >= 0.")

    @property
    def savings(self) -> CostUnits:
        return max(self.standard_cost - self.relayed_cost, 0)

    def estimate(self, request: SwapRequest) -> CostEstimate:
        should_consider = magnitude_of(request.amount) > self.unit_size
        return CostEstimate(
            should_consider=should_consider,
            savings=self.savings if should_consider else 0,
        )
