"""CostEstimator Port Interface.

Contract: Pure, deterministic estimate of standard vs. relayed execution cost for a swap.
"""

from __future__ import annotations

from typing import Protocol

from relayhook.types.types import CostEstimate, SwapRequest


class CostEstimator(Protocol):
    def estimate(self, request: SwapRequest) -> CostEstimate:
        """
        Return whether the request is worth considering for relay and the
        expected savings in cost units (>= 0). Must never raise.
        """
        ...
