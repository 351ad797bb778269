from __future__ import annotations

from dataclasses import dataclass

from relayhook.types.aliases import CostUnits


@dataclass(frozen=True)
class StaticCostMeter:
    """
    Reports a fixed remaining budget.
    Hosts that meter execution pass their own CostMeter instead.
    """

    budget: CostUnits = 0

    def __post_init__(self) -> None:
        if self.budget < 0:
            raise ValueError("StaticCostMeter.budget must be >= 0.")

    def remaining(self) -> CostUnits:
        return self.budget
