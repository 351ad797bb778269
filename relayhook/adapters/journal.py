"""JSON Lines notification journal.

Subscribes to the outbound channel and appends every delivered notification
envelope to disk, where the off-chain relayer picks it up out of band.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Union

import orjson

from relayhook.core.channel import Envelope, EventChannel
from relayhook.core.utility import to_jsonable
from relayhook.types.topics import ALL_TOPICS


class NotificationJournal:
    def __init__(self, sink_path: Union[str, Path]) -> None:
        self._sink_path = sink_path if isinstance(sink_path, Path) else Path(sink_path)

    @property
    def path(self) -> Path:
        return self._sink_path

    def attach(self, channel: EventChannel, topics: Iterable[str] = ALL_TOPICS) -> None:
        for topic in topics:
            channel.subscribe(topic, self.write)

    def write(self, envelope: Envelope) -> None:
        record = {
            "topic": envelope.topic,
            "seq": envelope.seq,
            "ts": envelope.ts,
            "kind": type(envelope.payload).__name__,
            "payload": to_jsonable(envelope.payload),
        }
        self._sink_path.parent.mkdir(parents=True, exist_ok=True)
        with self._sink_path.open("ab") as handle:
            handle.write(orjson.dumps(record) + b"\n")

    def read(self) -> list[dict[str, Any]]:
        if not self._sink_path.exists():
            return []
        with self._sink_path.open("rb") as handle:
            return [orjson.loads(line) for line in handle if line.strip()]
