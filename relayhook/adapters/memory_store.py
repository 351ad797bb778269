"""In-memory StateStore adapter.

Default store for tests and ephemeral hooks. Transactions snapshot the whole
keyspace on entry and restore it if the block raises; nested blocks act as
savepoints.
"""

from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)


class InMemoryStateStore:
    def __init__(self, initial: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._data: dict[str, dict[str, Any]] = {
            ns: copy.deepcopy(dict(entries)) for ns, entries in (initial or {}).items()
        }
        self._depth = 0

    # --- StateStore ---

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        bucket = self._data.get(namespace)
        if bucket is None or key not in bucket:
            return default
        # copies so callers can never mutate stored records in place
        return copy.deepcopy(bucket[key])

    def put(self, namespace: str, key: str, value: Any) -> None:
        self._data.setdefault(namespace, {})[key] = copy.deepcopy(value)

    def delete(self, namespace: str, key: str) -> None:
        bucket = self._data.get(namespace)
        if bucket is not None:
            bucket.pop(key, None)

    def items(self, namespace: str) -> Iterator[tuple[str, Any]]:
        bucket = self._data.get(namespace, {})
        for key in sorted(bucket):
            yield key, copy.deepcopy(bucket[key])

    @contextmanager
    def transaction(self) -> Iterator[None]:
        snapshot = copy.deepcopy(self._data)
        self._depth += 1
        try:
            yield
            if self._depth == 1:
                self._on_commit()
        except BaseException:
            self._data = snapshot
            logger.debug(f"State rolled back (depth={self._depth})")
            raise
        finally:
            self._depth -= 1

    # --- Hooks / exports ---

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    def _on_commit(self) -> None:
        """Called after the outermost transaction succeeds. Persistent stores override this."""

    def dump(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self._data)
