from __future__ import annotations

import logging
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from relayhook.adapters.clock import SystemClock
from relayhook.ports.clock import Clock
from relayhook.types.aliases import UnixMillis

logger = logging.getLogger(__name__)

Handler = Callable[["Envelope"], None]


@dataclass(frozen=True)
class Envelope:
    """Immutable notification envelope delivered to subscribers."""

    topic: str
    seq: int  # channel-wide, strictly increasing
    ts: UnixMillis
    payload: Any


@dataclass
class ChannelStats:
    published: int = 0
    delivered: int = 0  # successful handler invocations
    discarded: int = 0  # staged notifications dropped by an aborted request
    handler_errors: int = 0
    by_topic: dict[str, int] = field(default_factory=dict)


class EventChannel:
    """
    Append-only outbound notification channel.

    Notifications published inside `staged()` are held back until the block
    exits cleanly and are dropped if it raises, so an aborted request never
    leaks a notification. Delivery is synchronous and best-effort: a failing
    subscriber is logged and skipped, the request itself is not affected.
    """

    def __init__(self, clock: Optional[Clock] = None, history_size: Optional[int] = 1024) -> None:
        self._clock = clock or SystemClock()
        self._subscribers: dict[str, list[Handler]] = {}
        self._history: deque[Envelope] = deque(maxlen=history_size)
        self._staged: Optional[list[tuple[str, Any]]] = None
        self._seq = 0
        self._stats = ChannelStats()

    @property
    def stats(self) -> ChannelStats:
        return self._stats

    def subscribe(self, topic: str, handler: Handler) -> None:
        """
        Register a handler for a topic.
        Multiple handlers are called in registration order.
        """
        self._subscribers.setdefault(topic, []).append(handler)
        logger.debug(f"Registered handler for {topic}")

    def publish(self, topic: str, payload: Any) -> None:
        if self._staged is not None:
            self._staged.append((topic, payload))
            return
        self._deliver(topic, payload)

    @contextmanager
    def staged(self) -> Iterator[None]:
        if self._staged is not None:
            # nested block; the outermost one owns delivery
            yield
            return

        self._staged = []
        try:
            yield
        except BaseException:
            self._stats.discarded += len(self._staged)
            self._staged = None
            raise
        pending, self._staged = self._staged, None
        for topic, payload in pending:
            self._deliver(topic, payload)

    def history(self, topic: Optional[str] = None) -> list[Envelope]:
        if topic is None:
            return list(self._history)
        return [env for env in self._history if env.topic == topic]

    def _deliver(self, topic: str, payload: Any) -> None:
        self._seq += 1
        envelope = Envelope(topic=topic, seq=self._seq, ts=self._clock.now(), payload=payload)
        self._history.append(envelope)
        self._stats.published += 1
        self._stats.by_topic[topic] = self._stats.by_topic.get(topic, 0) + 1

        for handler in self._subscribers.get(topic, []):
            try:
                handler(envelope)
            except Exception as e:
                self._stats.handler_errors += 1
                logger.error(f"Subscriber error on {topic} (seq={envelope.seq}): {e}", exc_info=True)
            else:
                self._stats.delivered += 1
