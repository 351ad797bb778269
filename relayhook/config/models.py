from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from relayhook.policy.cost import FEE_DIVISOR, ONE_UNIT, RELAYED_COST, STANDARD_COST
from relayhook.types.types import MAX_FEE


class HookSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    owner: str = Field(min_length=1, description="bootstrap principal, authorized at first start")
    hook_id: str = Field(default="relayhook", min_length=1, description="telemetry tag")
    default_threshold: int = Field(default=50_000, ge=0, description="savings threshold (cost units)")
    fulfillment_mode: Literal["stateful", "stateless"] = Field(
        default="stateful", description="relay detection on the post-swap side"
    )
    strict_fulfillment: bool = Field(
        default=False, description="require amount/direction match to consume a pending slot"
    )
    cost_budget: int = Field(default=0, ge=0, description="static cost_remaining value")


class CostModelSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    unit_size: int = Field(default=ONE_UNIT, ge=0, description="minimum magnitude to consider")
    standard_cost: int = Field(default=STANDARD_COST, ge=0)
    relayed_cost: int = Field(default=RELAYED_COST, ge=0)


class FeeSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    divisor: int = Field(default=FEE_DIVISOR, ge=1)
    max_fee: int = Field(default=MAX_FEE, ge=0, le=MAX_FEE)


class StorageSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    state_path: Optional[Path] = Field(default=None, description="JSON state file")
    journal_path: Optional[Path] = Field(default=None, description="notification journal (JSONL)")
    telemetry_path: Optional[Path] = Field(default=None, description="telemetry sink (JSONL)")


class HookSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")
    hook: HookSection
    cost_model: CostModelSection = Field(default_factory=CostModelSection)
    fee: FeeSection = Field(default_factory=FeeSection)
    storage: StorageSection = Field(default_factory=StorageSection)
