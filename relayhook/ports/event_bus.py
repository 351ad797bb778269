"""EventBus Port Interface.

Contract: Append-only outbound notification channel (publish/subscribe by topic).
Delivery is best-effort and at-most-once per published event.
"""
from __future__ import annotations
from typing import Protocol, Callable, Any

class EventBus(Protocol):
    def publish(self, topic: str, payload: Any) -> None:
        """Publish a notification on a topic."""
        ...

    def subscribe(self, topic: str, handler: Callable[[Any], None]) -> None:
        """Register handler for all envelopes of given topic."""
        ...
