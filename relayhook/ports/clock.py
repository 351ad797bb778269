"""Clock Port Interface.

Contract: Provides the current UTC timestamp in milliseconds for envelopes and telemetry.
"""

from __future__ import annotations

from typing import Protocol

from relayhook.types.aliases import UnixMillis


class Clock(Protocol):
    def now(self) -> UnixMillis:
        """Return current UTC time as Unix milliseconds.
        Should be monotonic non-decreasing within a process.
        """
        ...
