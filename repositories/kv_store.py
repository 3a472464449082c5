"""
Key-value store port and adapters.

The lead repository only needs get / put / delete by key and a paginated
prefix scan. Keys are listed in lexicographic order. The pagination cursor is
an opaque string produced by the adapter; callers pass it back verbatim.

Adapters:
- InMemoryKeyValueStore: process-local, used for development and tests.
- SupabaseKeyValueStore: a Supabase table with `key` (text, primary key) and
  `value` (jsonb) columns.
"""

from __future__ import annotations

import base64
import binascii
import bisect
import json
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

JsonObject = Dict[str, Any]


class InvalidCursorError(ValueError):
    """Raised when a cursor was not produced by this store."""


@dataclass(frozen=True, slots=True)
class KeyListPage:
    keys: List[str]
    list_complete: bool
    cursor: Optional[str] = None


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[JsonObject]: ...

    def put(self, key: str, value: JsonObject) -> None: ...

    def delete(self, key: str) -> None: ...

    def list(self, prefix: str, limit: int, cursor: Optional[str] = None) -> KeyListPage: ...


def encode_cursor(last_key: str) -> str:
    return base64.urlsafe_b64encode(last_key.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> str:
    try:
        raw = base64.b64decode(cursor.encode("ascii"), altchars=b"-_", validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidCursorError("cursor is not valid") from exc


class InMemoryKeyValueStore:
    """
    Dictionary-backed store.

    Values are kept as JSON text so callers never share mutable state with
    the store, matching what a remote store would do. Access is serialized
    with a lock and `list` scans a snapshot of the keys, so it can be shared
    by the threadpool that runs sync endpoints.
    """

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, key: str) -> Optional[JsonObject]:
        with self._lock:
            raw = self._items.get(key)
        return json.loads(raw) if raw is not None else None

    def put(self, key: str, value: JsonObject) -> None:
        raw = json.dumps(value)
        with self._lock:
            self._items[key] = raw

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def list(self, prefix: str, limit: int, cursor: Optional[str] = None) -> KeyListPage:
        if limit < 1:
            raise ValueError("limit must be >= 1")

        with self._lock:
            snapshot = list(self._items)
        keys = sorted(key for key in snapshot if key.startswith(prefix))
        start = 0
        if cursor:
            start = bisect.bisect_right(keys, decode_cursor(cursor))

        page = keys[start:start + limit]
        list_complete = start + limit >= len(keys)
        next_cursor = None if list_complete or not page else encode_cursor(page[-1])
        return KeyListPage(keys=page, list_complete=list_complete, cursor=next_cursor)


class SupabaseKeyValueStore:
    """Store backed by a Supabase (PostgREST) table."""

    def __init__(self, client: Any, table: str = "kv_store") -> None:
        self._client = client
        self._table = table

    @staticmethod
    def _check(response: Any, action: str) -> List[JsonObject]:
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to {action}: {error}")
        return getattr(response, "data", None) or []

    def get(self, key: str) -> Optional[JsonObject]:
        response = (
            self._client.table(self._table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        rows = self._check(response, f"get key {key!r}")
        if not rows:
            return None
        return rows[0]["value"]

    def put(self, key: str, value: JsonObject) -> None:
        response = self._client.table(self._table).upsert({"key": key, "value": value}).execute()
        self._check(response, f"put key {key!r}")

    def delete(self, key: str) -> None:
        response = self._client.table(self._table).delete().eq("key", key).execute()
        self._check(response, f"delete key {key!r}")

    def list(self, prefix: str, limit: int, cursor: Optional[str] = None) -> KeyListPage:
        if limit < 1:
            raise ValueError("limit must be >= 1")

        query = self._client.table(self._table).select("key").like("key", f"{prefix}%")
        if cursor:
            query = query.gt("key", decode_cursor(cursor))
        # One extra row tells us whether another page exists.
        response = query.order("key").limit(limit + 1).execute()
        rows = self._check(response, f"list prefix {prefix!r}")

        keys = [str(row["key"]) for row in rows]
        list_complete = len(keys) <= limit
        page = keys[:limit]
        next_cursor = None if list_complete else encode_cursor(page[-1])
        return KeyListPage(keys=page, list_complete=list_complete, cursor=next_cursor)


__all__ = [
    "InMemoryKeyValueStore",
    "InvalidCursorError",
    "KeyListPage",
    "KeyValueStore",
    "SupabaseKeyValueStore",
    "decode_cursor",
    "encode_cursor",
]
