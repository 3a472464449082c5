"""
Lead repository (persistence).

This module provides *only* persistence operations for the Lead domain entity.
Validation and normalization belong to `services.lead_service`.

Key layout: every lead is stored under `lead:{id}`. Listing is a prefix scan
over `lead:`, so the store returns keys in lexicographic (id) order, not in
creation order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from domain.lead import Lead
from repositories.kv_store import InvalidCursorError, KeyValueStore

logger = logging.getLogger(__name__)

LEAD_KEY_PREFIX: str = "lead:"


class StoreError(RuntimeError):
    """Raised when the underlying store call fails. Carries the operation name."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause


@dataclass(frozen=True, slots=True)
class LeadKeyPage:
    leads: List[Lead]
    next_cursor: Optional[str]


def lead_key(lead_id: str) -> str:
    return f"{LEAD_KEY_PREFIX}{lead_id}"


def save_lead(store: KeyValueStore, lead: Lead) -> None:
    """Insert or overwrite the record for `lead.id`."""

    try:
        store.put(lead_key(lead.id), lead.to_record())
    except Exception as exc:
        logger.error("Store put failed for lead %s", lead.id, exc_info=True)
        raise StoreError("save lead", exc) from exc


def get_lead_by_id(store: KeyValueStore, lead_id: str) -> Lead | None:
    """
    Fetch a Lead by ID.

    Returns:
    - Lead if found
    - None if no record exists for the given ID
    """

    try:
        record = store.get(lead_key(lead_id))
    except Exception as exc:
        logger.error("Store get failed for lead %s", lead_id, exc_info=True)
        raise StoreError("get lead", exc) from exc

    if record is None:
        return None
    return Lead.from_record(record)


def list_lead_page(store: KeyValueStore, limit: int, cursor: Optional[str] = None) -> LeadKeyPage:
    """
    Read one page of the `lead:` namespace in store order.

    Records deleted between the key scan and the fetch are skipped, and so
    are records that no longer form a valid Lead (logged as warnings).

    Raises:
    - InvalidCursorError if `cursor` was not produced by the store
    - StoreError for any other store failure
    """

    try:
        page = store.list(LEAD_KEY_PREFIX, limit, cursor)
        records = [store.get(key) for key in page.keys]
    except InvalidCursorError:
        raise
    except Exception as exc:
        logger.error("Store list failed", exc_info=True)
        raise StoreError("list leads", exc) from exc

    leads: List[Lead] = []
    for key, record in zip(page.keys, records):
        if record is None:
            continue
        try:
            leads.append(Lead.from_record(record))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed lead record %s", key, exc_info=True)

    next_cursor = None if page.list_complete else page.cursor
    return LeadKeyPage(leads=leads, next_cursor=next_cursor)


def delete_lead_by_id(store: KeyValueStore, lead_id: str) -> None:
    """Delete unconditionally; a missing key is not an error."""

    try:
        store.delete(lead_key(lead_id))
    except Exception as exc:
        logger.error("Store delete failed for lead %s", lead_id, exc_info=True)
        raise StoreError("delete lead", exc) from exc


__all__ = [
    "LEAD_KEY_PREFIX",
    "LeadKeyPage",
    "StoreError",
    "delete_lead_by_id",
    "get_lead_by_id",
    "lead_key",
    "list_lead_page",
    "save_lead",
]
