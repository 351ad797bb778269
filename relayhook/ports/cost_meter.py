"""CostMeter Port Interface.

Contract: Report the execution budget left for the current request (reported in SwapCompleted).
"""

from __future__ import annotations

from typing import Protocol

from relayhook.types.aliases import CostUnits


class CostMeter(Protocol):
    def remaining(self) -> CostUnits: ...
