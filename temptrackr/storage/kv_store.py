"""Key-value string stores backing the location and history repositories.

Repositories read a whole JSON collection, mutate it and write it back.
There is no locking: a store is assumed to have a single writer.
"""

import json
import logging
import sqlite3
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store for tests and server contexts."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqliteStore:
    """Store persisted in the kv_store table of a migrated database."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, key: str) -> str | None:
        row = self.conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return row[0]

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
            (key, value),
        )
        self.conn.commit()

    def delete(self, key: str) -> None:
        self.conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self.conn.commit()


def read_json_list(store: KeyValueStore | None, key: str) -> list[Any]:
    """Load a JSON array; absent store, missing key or bad JSON give []."""
    if store is None:
        return []
    raw = store.get(key)
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding unparsable value stored under %s", key)
        return []
    if not isinstance(data, list):
        logger.warning("Expected a list under %s, got %s", key, type(data).__name__)
        return []
    return data


def write_json_list(store: KeyValueStore | None, key: str, items: list[Any]) -> None:
    if store is None:
        return
    store.set(key, json.dumps(items, ensure_ascii=False))
