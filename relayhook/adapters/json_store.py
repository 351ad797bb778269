"""JSON file StateStore adapter.

Keeps the working set in memory (see InMemoryStateStore) and persists the whole
keyspace to a single JSON document after each committed top-level transaction.
Writes go to a sibling temp file first and are swapped in with os.replace, so a
crash never leaves a half-written state file behind.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

import orjson

from relayhook.adapters.memory_store import InMemoryStateStore
from relayhook.core.utility import decode_keyspace, encode_keyspace
from relayhook.errors.errors import StateStoreError

logger = logging.getLogger(__name__)


class JsonFileStateStore(InMemoryStateStore):
    def __init__(self, path: Union[str, Path]) -> None:
        self._path = path if isinstance(path, Path) else Path(path)
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict:
        if not self._path.exists():
            logger.info(f"No state file at {self._path}, starting empty")
            return {}
        try:
            raw = orjson.loads(self._path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as exc:
            raise StateStoreError(
                f"Failed to load state: {exc}",
                path=str(self._path),
                component="JsonFileStateStore",
            ) from exc
        if not isinstance(raw, dict):
            raise StateStoreError(
                "State file must contain a JSON object",
                path=str(self._path),
                component="JsonFileStateStore",
            )
        try:
            return decode_keyspace(raw)
        except (TypeError, ValueError) as exc:
            raise StateStoreError(
                f"Malformed state: {exc}",
                path=str(self._path),
                component="JsonFileStateStore",
            ) from exc

    def _on_commit(self) -> None:
        self.flush()

    def flush(self) -> None:
        payload = orjson.dumps(encode_keyspace(self.dump()), option=orjson.OPT_SORT_KEYS)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StateStoreError(
                f"Failed to persist state: {exc}",
                path=str(self._path),
                component="JsonFileStateStore",
            ) from exc
        logger.debug(
            "state_persisted",
            extra={"event": "state_persisted", "path": str(self._path), "bytes": len(payload)},
        )
