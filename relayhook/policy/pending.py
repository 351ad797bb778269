"""
Pending-request tracking between a relay decision and the relayer's swap.

Each venue owns a single slot:

    IDLE --(relay decision)--> PENDING --(authorized swap on venue)--> IDLE

A new relay decision overwrites the slot (no queue), which bounds state to one
record per venue even if the relayer never shows up. Slots do not expire.

When the slot is consumed, the venue's in-flight swap is tagged as a relay
fulfillment so the post-swap side can attribute it to the original requester.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from relayhook.core.state import Keyspace
from relayhook.policy.authorization import AuthorizationRegistry
from relayhook.types.aliases import Principal, VenueId
from relayhook.types.types import FulfillmentTag, PendingEntry, PendingState, SwapRequest

logger = logging.getLogger(__name__)


class PendingRequestTracker:
    def __init__(
        self,
        slots: Keyspace,
        fulfillments: Keyspace,
        auth: AuthorizationRegistry,
        *,
        strict_matching: bool = False,
    ) -> None:
        """
        Args:
            slots: keyspace holding one PendingEntry record per venue
            fulfillments: keyspace holding in-flight fulfillment tags per venue
            auth: registry deciding who may fulfill a pending request
            strict_matching: also require amount and direction of the fulfilling
                swap to match the stored entry
        """
        self._slots = slots
        self._fulfillments = fulfillments
        self._auth = auth
        self._strict_matching = strict_matching

    @property
    def strict_matching(self) -> bool:
        return self._strict_matching

    def peek(self, venue: VenueId) -> Optional[PendingEntry]:
        record = self._slots.get(venue)
        if record is None:
            return None
        return PendingEntry.from_record(record)

    def state(self, venue: VenueId) -> PendingState:
        entry = self.peek(venue)
        if entry is not None and entry.active:
            return PendingState.PENDING
        return PendingState.IDLE

    def active_venues(self) -> list[VenueId]:
        return [venue for venue, record in self._slots.items() if record.get("active")]

    def open(self, venue: VenueId, request: SwapRequest) -> PendingEntry:
        """IDLE/PENDING -> PENDING. Overwrites whatever the slot held."""
        previous = self.peek(venue)
        if previous is not None and previous.active:
            logger.info(
                f"Pending request of {previous.requester} on {venue} "
                f"overwritten by {request.requester}"
            )
        entry = PendingEntry(
            requester=request.requester,
            amount=request.amount,
            zero_for_one=request.zero_for_one,
            active=True,
        )
        self._slots.put(venue, entry.to_record())
        return entry

    def try_fulfill(
        self, venue: VenueId, sender: Principal, request: SwapRequest
    ) -> Optional[PendingEntry]:
        """
        PENDING -> IDLE when an authorized sender swaps on the venue.
        Returns the consumed entry, or None if the slot was not consumed.
        """
        entry = self.peek(venue)
        if entry is None or not entry.active:
            return None
        if not self._auth.is_authorized(sender):
            return None
        if self._strict_matching and not entry.matches(request):
            logger.warning(
                "fulfillment_mismatch",
                extra={
                    "event": "fulfillment_mismatch",
                    "venue": venue,
                    "sender": sender,
                    "expected_amount": str(entry.amount),
                    "actual_amount": str(request.amount),
                },
            )
            return None

        self._slots.put(venue, replace(entry, active=False).to_record())
        tag = FulfillmentTag(
            originator=entry.requester,
            amount=entry.amount,
            zero_for_one=entry.zero_for_one,
        )
        self._fulfillments.put(venue, tag.to_record())
        logger.info(f"Pending request of {entry.requester} on {venue} fulfilled by {sender}")
        return entry

    def take_fulfillment(self, venue: VenueId) -> Optional[FulfillmentTag]:
        """Pop the fulfillment tag left by try_fulfill for the venue's in-flight swap."""
        record = self._fulfillments.get(venue)
        if record is None:
            return None
        self._fulfillments.delete(venue)
        return FulfillmentTag.from_record(record)


class StatelessRelayDetector:
    """
    Slot-free variant: a swap counts as relayed whenever the sender is authorized.

    This cannot tell an authorized principal's own ordinary swap apart from a
    real fulfillment, so it is only used when FulfillmentMode.STATELESS is
    configured explicitly.
    """

    def __init__(self, auth: AuthorizationRegistry) -> None:
        self._auth = auth

    def was_relayed(self, sender: Principal) -> bool:
        return self._auth.is_authorized(sender)
