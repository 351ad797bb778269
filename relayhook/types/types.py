from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from relayhook.types.aliases import CostUnits, FeeUnits, Principal, StateRecord, VenueId

# -------- Host encodings --------

# signed 256-bit amounts
MAX_POSITIVE = 2**255 - 1
MIN_SIGNED = -(2**255)

# fee field is an unsigned 24-bit integer on the host
MAX_FEE: FeeUnits = 2**24 - 1

# -------- Enums --------


class PendingState(str, Enum):
    """Per-venue state of the pending-request slot."""

    IDLE = "idle"
    PENDING = "pending"


class DecisionReason(str, Enum):
    RELAY = "relay"
    BELOW_UNIT = "below_unit"  # swap too small to be worth batching
    BELOW_THRESHOLD = "below_threshold"
    OPTED_OUT = "opted_out"


class HookAck(str, Enum):
    """Selector-equivalent acknowledgements returned to the host."""

    BEFORE_SWAP = "before_swap"
    AFTER_SWAP = "after_swap"


def _check_signed(name: str, value: int) -> None:
    if not (MIN_SIGNED <= value <= MAX_POSITIVE):
        raise ValueError(f"{name} must fit a signed 256-bit integer (got {value}).")


def check_uint(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer (got {value!r}).")


# --- Host inputs ---


@dataclass(frozen=True, slots=True)
class SwapParams:
    """Swap parameters as passed by the host around execution."""

    zero_for_one: bool
    amount_specified: int  # negative = exact input, positive = exact output
    sqrt_price_limit_x96: int = 0

    def __post_init__(self) -> None:
        _check_signed("SwapParams.amount_specified", self.amount_specified)


@dataclass(frozen=True, slots=True)
class BalanceDelta:
    """Net token balance change of the swapper, one signed value per side."""

    amount0: int = 0
    amount1: int = 0

    def __post_init__(self) -> None:
        _check_signed("BalanceDelta.amount0", self.amount0)
        _check_signed("BalanceDelta.amount1", self.amount1)

    def output_side(self, zero_for_one: bool) -> int:
        return self.amount1 if zero_for_one else self.amount0


ZERO_DELTA = BalanceDelta()


# --- Core records ---


@dataclass(frozen=True, slots=True)
class SwapRequest:
    requester: Principal
    amount: int  # signed; may be MIN_SIGNED
    zero_for_one: bool
    opt_in: bool = True

    def __post_init__(self) -> None:
        if not self.requester:
            raise ValueError("SwapRequest.requester must be a non-empty string.")
        _check_signed("SwapRequest.amount", self.amount)

    @classmethod
    def from_params(cls, sender: Principal, params: SwapParams, opt_in: bool) -> SwapRequest:
        return cls(
            requester=sender,
            amount=params.amount_specified,
            zero_for_one=params.zero_for_one,
            opt_in=opt_in,
        )


@dataclass(frozen=True, slots=True)
class PendingEntry:
    requester: Principal
    amount: int
    zero_for_one: bool
    active: bool = True

    def matches(self, request: SwapRequest) -> bool:
        return self.amount == request.amount and self.zero_for_one == request.zero_for_one

    def to_record(self) -> StateRecord:
        return asdict(self)

    @classmethod
    def from_record(cls, record: StateRecord) -> PendingEntry:
        return cls(
            requester=record["requester"],
            amount=int(record["amount"]),
            zero_for_one=bool(record["zero_for_one"]),
            active=bool(record["active"]),
        )


@dataclass(frozen=True, slots=True)
class VenueMetrics:
    relayed_count: int = 0
    cumulative_reported_savings: CostUnits = 0
    executed_count: int = 0

    def to_record(self) -> StateRecord:
        return asdict(self)

    @classmethod
    def from_record(cls, record: StateRecord) -> VenueMetrics:
        return cls(
            relayed_count=int(record.get("relayed_count", 0)),
            cumulative_reported_savings=int(record.get("cumulative_reported_savings", 0)),
            executed_count=int(record.get("executed_count", 0)),
        )


@dataclass(frozen=True, slots=True)
class CostEstimate:
    should_consider: bool
    savings: CostUnits


@dataclass(frozen=True, slots=True)
class RelayDecision:
    should_relay: bool
    estimated_savings: CostUnits
    fee: FeeUnits
    threshold: CostUnits
    reason: DecisionReason


# --- Notifications ---


@dataclass(frozen=True, slots=True)
class RelayRequested:
    originator: Principal
    venue: VenueId
    amount: int
    zero_for_one: bool
    estimated_savings: CostUnits


@dataclass(frozen=True, slots=True)
class SwapCompleted:
    originator: Principal
    venue: VenueId
    amount: int
    amount_out: int
    was_relayed: bool
    cost_remaining: CostUnits


# --- Host outputs ---


@dataclass(frozen=True, slots=True)
class BeforeSwapResult:
    ack: HookAck
    delta: BalanceDelta
    fee: FeeUnits


@dataclass(frozen=True, slots=True)
class AfterSwapResult:
    ack: HookAck
    delta: int = 0


@dataclass(frozen=True, slots=True)
class HookPermissions:
    """
    Lifecycle points the host must route to this hook.
    Only the swap pair is used; everything else stays off.
    """

    before_initialize: bool = False
    after_initialize: bool = False
    before_add_liquidity: bool = False
    after_add_liquidity: bool = False
    before_remove_liquidity: bool = False
    after_remove_liquidity: bool = False
    before_swap: bool = True
    after_swap: bool = True
    before_donate: bool = False
    after_donate: bool = False
    before_swap_returns_delta: bool = False
    after_swap_returns_delta: bool = False


@dataclass(frozen=True, slots=True)
class FulfillmentTag:
    """Marks the in-flight swap on a venue as the relayer's fulfillment."""

    originator: Principal
    amount: int
    zero_for_one: bool

    def to_record(self) -> StateRecord:
        return asdict(self)

    @classmethod
    def from_record(cls, record: StateRecord) -> FulfillmentTag:
        return cls(
            originator=record["originator"],
            amount=int(record["amount"]),
            zero_for_one=bool(record["zero_for_one"]),
        )
