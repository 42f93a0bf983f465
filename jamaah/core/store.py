"""Key-value store adapter over a single Firestore collection.

Every "table" of the application is a key prefix (``timeline:``,
``notification:<uid>:``...) in one flat collection. Each key is stored as a
document whose id is the key itself, so ``get``/``set``/``delete`` are single
document operations and a prefix scan is a range query on the ``key`` field.

Read-modify-write helpers (``mutate``, ``Repository.update``) are NOT atomic:
two concurrent requests against the same key both read the old value and the
last write wins.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)

# Highest code point Firestore sorts; closes a prefix range query.
PREFIX_END = "\uf8ff"

T = TypeVar("T")


class KVStore:
    """get / set / delete / get_by_prefix over a Firestore collection."""

    def __init__(self, db: Client, collection: str = "kv_store") -> None:
        self.db = db
        self.collection = collection

    def _ref(self, key: str) -> Any:
        if not key or "/" in key:
            raise ValueError(f"Invalid key: {key!r}")
        return self.db.collection(self.collection).document(key)

    def get(self, key: str) -> Any:
        """Return the value stored at ``key`` or None."""
        snapshot = self._ref(key).get()
        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        return data.get("value")

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` at ``key``, replacing any previous value."""
        self._ref(key).set({"key": key, "value": value})

    def delete(self, key: str) -> None:
        """Remove ``key``; deleting a missing key is a no-op."""
        self._ref(key).delete()

    def get_by_prefix(self, prefix: str) -> list[Any]:
        """Return the values of every key starting with ``prefix``."""
        query = (
            self.db.collection(self.collection)
            .where("key", ">=", prefix)
            .where("key", "<", prefix + PREFIX_END)
        )
        values = []
        for doc in query.stream():
            data = doc.to_dict() or {}
            if data.get("key", "").startswith(prefix):
                values.append(data.get("value"))
        return values

    def mutate(
        self, key: str, mutator: Callable[[Any], Any], default: Any = None
    ) -> Any:
        """Read ``key``, apply ``mutator`` and write the result back.

        ``mutator`` receives a copy of the current value (or of ``default``)
        and returns the new value. Not atomic: last write wins.
        """
        current = self.get(key)
        if current is None:
            current = copy.deepcopy(default)
        updated = mutator(current)
        self.set(key, updated)
        logger.debug("Mutated %s", key)
        return updated


class Repository(Generic[T]):
    """Typed view of one key namespace of a KVStore."""

    def __init__(self, store: KVStore, prefix: str) -> None:
        self.store = store
        self.prefix = prefix

    def key(self, record_id: str) -> str:
        """Return the full store key for ``record_id``."""
        return f"{self.prefix}{record_id}"

    def get(self, record_id: str) -> T | None:
        return self.store.get(self.key(record_id))

    def exists(self, record_id: str) -> bool:
        return bool(self.get(record_id))

    def list(self) -> list[T]:
        return [v for v in self.store.get_by_prefix(self.prefix) if v is not None]

    def put(self, record_id: str, entity: T) -> T:
        self.store.set(self.key(record_id), entity)
        return entity

    def delete(self, record_id: str) -> None:
        self.store.delete(self.key(record_id))

    def update(self, record_id: str, mutator: Callable[[T], T]) -> T | None:
        """Apply ``mutator`` to an existing record; None when it is missing."""
        current = self.get(record_id)
        if current is None:
            return None
        updated = mutator(current)
        self.put(record_id, updated)
        return updated
