"""
Configuration types for the relay hook.

Immutable, validated dataclasses; file-based settings are translated into
these by ConfigLoader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from relayhook.errors.errors import ConfigurationError
from relayhook.policy.cost import FEE_DIVISOR, ONE_UNIT, RELAYED_COST, STANDARD_COST
from relayhook.types.types import MAX_FEE


class FulfillmentMode(str, Enum):
    """How the post-swap side decides whether a swap was a relay fulfillment."""

    STATEFUL = "stateful"  # pending slot per venue
    STATELESS = "stateless"  # any authorized sender counts as relayed


@dataclass(frozen=True)
class CostModelConfig:
    unit_size: int = ONE_UNIT
    standard_cost: int = STANDARD_COST
    relayed_cost: int = RELAYED_COST

    def __post_init__(self) -> None:
        for name in ("unit_size", "standard_cost", "relayed_cost"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(f"{name} must be non-negative", field=name, value=value)
        if self.relayed_cost > self.standard_cost:
            raise ConfigurationError(
                "relayed_cost must not exceed standard_cost",
                field="relayed_cost",
                value=self.relayed_cost,
            )


@dataclass(frozen=True)
class FeeConfig:
    divisor: int = FEE_DIVISOR
    max_fee: int = MAX_FEE

    def __post_init__(self) -> None:
        if self.divisor <= 0:
            raise ConfigurationError("divisor must be positive", field="divisor", value=self.divisor)
        if not (0 <= self.max_fee <= MAX_FEE):
            raise ConfigurationError(
                f"max_fee must be between 0 and {MAX_FEE}", field="max_fee", value=self.max_fee
            )


@dataclass(frozen=True)
class HookConfig:
    """
    Top-level configuration for RelayHook.

    Example:
        config = HookConfig(
            owner="0xowner",
            default_threshold=50_000,
            fulfillment_mode=FulfillmentMode.STATEFUL,
        )
    """

    owner: str
    hook_id: str = "relayhook"  # tags telemetry records
    default_threshold: int = 50_000
    fulfillment_mode: FulfillmentMode = FulfillmentMode.STATEFUL
    strict_fulfillment: bool = False
    cost_budget: int = 0  # reported as cost_remaining when no CostMeter is injected
    cost_model: CostModelConfig = field(default_factory=CostModelConfig)
    fee: FeeConfig = field(default_factory=FeeConfig)

    # Persistence / sinks (None = in-memory only)
    state_path: Optional[Path] = None
    journal_path: Optional[Path] = None
    telemetry_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.owner:
            raise ConfigurationError("owner must be configured", field="owner")
        if self.default_threshold < 0:
            raise ConfigurationError(
                "default_threshold must be non-negative",
                field="default_threshold",
                value=self.default_threshold,
            )
        if self.cost_budget < 0:
            raise ConfigurationError(
                "cost_budget must be non-negative", field="cost_budget", value=self.cost_budget
            )
        if self.strict_fulfillment and self.fulfillment_mode == FulfillmentMode.STATELESS:
            raise ConfigurationError(
                "strict_fulfillment requires the stateful fulfillment mode",
                field="strict_fulfillment",
                value=self.strict_fulfillment,
            )
