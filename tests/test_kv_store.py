"""
Tests for `repositories/kv_store.py`.

Covers the in-memory adapter (prefix scan, lexicographic order, opaque
cursor) and the Supabase adapter's query building against a fake client.
"""

from __future__ import annotations

import threading
from typing import Any, List

import pytest

from repositories.kv_store import (
    InMemoryKeyValueStore,
    InvalidCursorError,
    SupabaseKeyValueStore,
    decode_cursor,
    encode_cursor,
)


def test_get_put_delete() -> None:
    """Verify basic operations and that delete of a missing key is a no-op."""

    store = InMemoryKeyValueStore()
    store.put("lead:1", {"id": "1"})

    assert store.get("lead:1") == {"id": "1"}
    store.delete("lead:1")
    store.delete("lead:1")
    assert store.get("lead:1") is None


def test_values_are_copied() -> None:
    """Verify mutating a returned value does not change the stored one."""

    store = InMemoryKeyValueStore()
    store.put("k", {"processed": False})
    store.get("k")["processed"] = True

    assert store.get("k") == {"processed": False}


def test_list_scans_prefix_in_key_order_with_cursor() -> None:
    """Verify pages are disjoint, ordered by key and end with list_complete."""

    store = InMemoryKeyValueStore()
    for key in ["lead:c", "lead:a", "other:x", "lead:b"]:
        store.put(key, {})

    first = store.list("lead:", limit=2)
    assert first.keys == ["lead:a", "lead:b"]
    assert not first.list_complete and first.cursor

    second = store.list("lead:", limit=2, cursor=first.cursor)
    assert second.keys == ["lead:c"]
    assert second.list_complete and second.cursor is None


def test_exact_page_boundary_is_complete() -> None:
    """Verify a page that consumes the last key reports completion."""

    store = InMemoryKeyValueStore()
    store.put("lead:a", {})
    store.put("lead:b", {})

    page = store.list("lead:", limit=2)
    assert page.list_complete and page.cursor is None


def test_invalid_cursor_and_limit() -> None:
    """Verify garbage cursors and non-positive limits are rejected."""

    store = InMemoryKeyValueStore()

    with pytest.raises(InvalidCursorError):
        store.list("lead:", limit=5, cursor="%%%")
    with pytest.raises(ValueError):
        store.list("lead:", limit=0)


def test_cursor_encoding_round_trip() -> None:
    assert decode_cursor(encode_cursor("lead:ä-1")) == "lead:ä-1"


def test_list_while_another_thread_writes() -> None:
    """Verify listing returns a page instead of failing while keys are being added."""

    store = InMemoryKeyValueStore()
    for n in range(5000):
        store.put(f"lead:{n:05d}", {})

    stop = threading.Event()

    def writer() -> None:
        n = 0
        while not stop.is_set():
            store.put(f"lead:w{n}", {})
            store.delete(f"lead:w{n - 50}")
            n += 1

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        pages = [store.list("lead:", limit=10) for _ in range(200)]
    finally:
        stop.set()
        thread.join()

    assert all(page.keys == [f"lead:{n:05d}" for n in range(10)] for page in pages)


class FakeResponse:
    def __init__(self, data: List[Any], error: Any = None) -> None:
        self.data = data
        self.error = error


class FakeQuery:
    """Records the PostgREST call chain and returns canned rows."""

    def __init__(self, calls: List[tuple], rows: List[Any], error: Any = None) -> None:
        self.calls = calls
        self.rows = rows
        self.error = error

    def __getattr__(self, name: str):
        def method(*args: Any) -> "FakeQuery":
            self.calls.append((name, *args))
            return self
        return method

    def execute(self) -> FakeResponse:
        return FakeResponse(self.rows, self.error)


class FakeSupabase:
    def __init__(self, rows: List[Any], error: Any = None) -> None:
        self.calls: List[tuple] = []
        self.rows = rows
        self.error = error

    def table(self, name: str) -> FakeQuery:
        self.calls.append(("table", name))
        return FakeQuery(self.calls, self.rows, self.error)


def test_supabase_list_requests_one_extra_row() -> None:
    """Verify the adapter filters by prefix, orders by key and detects a next page."""

    client = FakeSupabase([{"key": "lead:a"}, {"key": "lead:b"}, {"key": "lead:c"}])
    store = SupabaseKeyValueStore(client, table="kv")

    page = store.list("lead:", limit=2, cursor=encode_cursor("lead:0"))

    assert ("table", "kv") in client.calls
    assert ("like", "key", "lead:%") in client.calls
    assert ("gt", "key", "lead:0") in client.calls
    assert ("limit", 3) in client.calls
    assert page.keys == ["lead:a", "lead:b"]
    assert not page.list_complete
    assert decode_cursor(page.cursor) == "lead:b"


def test_supabase_get_and_put() -> None:
    """Verify get unwraps the value column and put upserts key and value."""

    client = FakeSupabase([{"value": {"id": "1"}}])
    store = SupabaseKeyValueStore(client)

    assert store.get("lead:1") == {"id": "1"}
    store.put("lead:1", {"id": "1"})
    assert ("upsert", {"key": "lead:1", "value": {"id": "1"}}) in client.calls


def test_supabase_error_raises() -> None:
    """Verify an error response becomes a RuntimeError."""

    store = SupabaseKeyValueStore(FakeSupabase([], error="boom"))

    with pytest.raises(RuntimeError, match="boom"):
        store.delete("lead:1")
