from __future__ import annotations

from typing import Any, Iterator

from relayhook.ports.state_store import StateStore

# namespaces inside the shared store, one per component
NS_META = "meta"
NS_AUTH = "auth"
NS_THRESHOLDS = "thresholds"
NS_PENDING = "pending"
NS_FULFILLMENT = "fulfillment"
NS_METRICS = "metrics"


class Keyspace:
    """
    Narrow view over one namespace of the shared StateStore.
    Components only ever receive their own Keyspace, never the store itself.
    """

    def __init__(self, store: StateStore, namespace: str) -> None:
        self._store = store
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(self._namespace, key, default)

    def put(self, key: str, value: Any) -> None:
        self._store.put(self._namespace, key, value)

    def delete(self, key: str) -> None:
        self._store.delete(self._namespace, key)

    def items(self) -> Iterator[tuple[str, Any]]:
        return self._store.items(self._namespace)

    def keys(self) -> list[str]:
        return [key for key, _ in self._store.items(self._namespace)]
