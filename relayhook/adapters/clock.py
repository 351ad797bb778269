from __future__ import annotations

from datetime import datetime, timezone

from relayhook.types.aliases import UnixMillis


class SystemClock:
    """Clock adapter that returns the current UTC time in milliseconds."""

    def now(self) -> UnixMillis:
        return int(datetime.now(timezone.utc).timestamp() * 1000)
