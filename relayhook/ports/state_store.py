"""StateStore Port Interface.

Contract: Namespaced key-value store holding all mutable hook state
(authorizations, thresholds, pending slots, metrics). Values are plain JSON-able data.
`transaction()` groups the mutations of one request: on exception every
mutation made inside the block is rolled back and the exception propagates.
"""

from __future__ import annotations

from typing import Any, ContextManager, Iterator, Protocol


class StateStore(Protocol):
    def get(self, namespace: str, key: str, default: Any = None) -> Any: ...
    def put(self, namespace: str, key: str, value: Any) -> None: ...
    def delete(self, namespace: str, key: str) -> None: ...
    def items(self, namespace: str) -> Iterator[tuple[str, Any]]: ...
    def transaction(self) -> ContextManager[None]: ...
