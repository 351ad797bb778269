from __future__ import annotations

import logging

from relayhook.core.state import Keyspace
from relayhook.policy.authorization import AuthorizationRegistry
from relayhook.types.aliases import CostUnits, VenueId
from relayhook.types.types import check_uint

logger = logging.getLogger(__name__)

_DEFAULT_KEY = "default"
_VENUE_PREFIX = "venue:"


class ThresholdPolicy:
    """
    Minimum savings (in cost units) a swap must beat before it is relayed.
    A venue value of 0 means "unset" and falls back to the default.
    """

    def __init__(self, keyspace: Keyspace, auth: AuthorizationRegistry) -> None:
        self._keyspace = keyspace
        self._auth = auth

    def initialize(self, default: CostUnits) -> None:
        check_uint("default threshold", default)
        self._keyspace.put(_DEFAULT_KEY, default)

    # --- reads ---

    def default_threshold(self) -> CostUnits:
        return int(self._keyspace.get(_DEFAULT_KEY, 0))

    def venue_threshold(self, venue: VenueId) -> CostUnits:
        """Raw per-venue value (0 = unset)."""
        return int(self._keyspace.get(_VENUE_PREFIX + venue, 0))

    def effective_threshold(self, venue: VenueId) -> CostUnits:
        value = self.venue_threshold(venue)
        return value if value != 0 else self.default_threshold()

    def overrides(self) -> dict[VenueId, CostUnits]:
        return {
            key[len(_VENUE_PREFIX) :]: int(value)
            for key, value in self._keyspace.items()
            if key.startswith(_VENUE_PREFIX) and value
        }

    # --- admin ---

    def set_default(self, caller: str, value: CostUnits) -> None:
        self._auth.require(caller, "set_default_threshold")
        check_uint("default threshold", value)
        self._keyspace.put(_DEFAULT_KEY, value)
        logger.info(f"Default threshold set to {value} by {caller}")

    def set_venue_threshold(self, caller: str, venue: VenueId, value: CostUnits) -> None:
        self._auth.require(caller, "set_venue_threshold")
        check_uint("venue threshold", value)
        if value == 0:
            self._keyspace.delete(_VENUE_PREFIX + venue)
        else:
            self._keyspace.put(_VENUE_PREFIX + venue, value)
        logger.info(f"Threshold for venue {venue} set to {value} by {caller}")
