"""
Lead service: validation and lifecycle of submitted leads.

Validation order (fail fast, the first violated rule is reported):
1. company non-empty after trim
2. contact non-empty after trim
3. email non-empty after trim, containing "@" with a "." in the domain part
4. phone non-empty after trim
5. consent is exactly the boolean True

Normalization:
- free-text fields are trimmed, email is lowercased
- employeesRange defaults to "N/A" when blank
- role, notes, firewallProvider, vpnProvider default to ""
- scoreSummary defaults to the zero summary

Concurrency: every call is independent; the store is the only shared state.
Processed-flag updates are last-write-wins.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional

from domain.lead import Lead, ScoreSummary
from domain.time import now_epoch_ms
from repositories.kv_store import InvalidCursorError, KeyValueStore
from repositories.lead_repository import (
    delete_lead_by_id,
    get_lead_by_id,
    list_lead_page,
    save_lead,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT: int = 10
MAX_PAGE_LIMIT: int = 100
DEFAULT_EMPLOYEES_RANGE: str = "N/A"


class LeadValidationError(ValueError):
    """Raised when a lead payload or update request violates a rule."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class LeadNotFoundError(LookupError):
    """Raised when no lead exists for the requested id."""

    def __init__(self, lead_id: str) -> None:
        super().__init__(f"Lead not found: {lead_id}")
        self.lead_id = lead_id


@dataclass(frozen=True, slots=True)
class LeadPage:
    """One page of leads, newest first."""

    items: List[Lead]
    next_cursor: Optional[str]


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return value.strip() if isinstance(value, str) else ""


def is_valid_email(email: str) -> bool:
    """Check the normalized email: an "@" with a non-empty local part and a dotted domain."""

    local, at, domain = email.rpartition("@")
    return bool(at) and bool(local) and "." in domain


def validate_lead_payload(payload: Any) -> None:
    """Raise LeadValidationError for the first violated rule."""

    if not isinstance(payload, Mapping):
        raise LeadValidationError("body", "Invalid JSON body")

    if not _text(payload, "company"):
        raise LeadValidationError("company", "Company name is required.")
    if not _text(payload, "contact"):
        raise LeadValidationError("contact", "Contact person is required.")
    email = _text(payload, "email").lower()
    if not email or not is_valid_email(email):
        raise LeadValidationError("email", "A valid email address is required.")
    if not _text(payload, "phone"):
        raise LeadValidationError("phone", "Phone number is required.")
    if payload.get("consent") is not True:
        raise LeadValidationError("consent", "Consent must be true.")


def create_lead(
    store: KeyValueStore,
    payload: Any,
    *,
    clock: Optional[Callable[[], datetime]] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> Lead:
    """
    Validate, normalize and persist a new lead.

    Args:
        store: key-value store holding the `lead:` namespace
        payload: raw submission (camelCase keys, as sent by the funnel)
        clock: returns the current UTC datetime (defaults to now)
        id_factory: returns a fresh id (defaults to a random UUID4 string)

    Raises:
        LeadValidationError: the payload violates a rule; nothing is persisted
        StoreError: the store write failed
    """

    try:
        validate_lead_payload(payload)
    except LeadValidationError as exc:
        logger.warning("Rejected lead submission: invalid %s", exc.field)
        raise

    lead = Lead(
        id=id_factory() if id_factory is not None else str(uuid.uuid4()),
        created_at=now_epoch_ms(clock),
        company=_text(payload, "company"),
        contact=_text(payload, "contact"),
        employees_range=_text(payload, "employeesRange") or DEFAULT_EMPLOYEES_RANGE,
        email=_text(payload, "email").lower(),
        phone=_text(payload, "phone"),
        role=_text(payload, "role"),
        notes=_text(payload, "notes"),
        consent=True,
        processed=False,
        firewall_provider=_text(payload, "firewallProvider"),
        vpn_provider=_text(payload, "vpnProvider"),
        score_summary=ScoreSummary.from_record(payload.get("scoreSummary")),
    )

    save_lead(store, lead)
    logger.info("Created lead %s", lead.id)
    return lead


def clamp_page_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_PAGE_LIMIT
    return max(1, min(MAX_PAGE_LIMIT, limit))


def list_leads(store: KeyValueStore, cursor: Optional[str] = None, limit: Optional[int] = None) -> LeadPage:
    """
    Return one page of leads sorted by creation time, newest first.

    The store scans keys in lexicographic order, so each page is re-sorted
    by `created_at`. The cursor is opaque: pass back `next_cursor` verbatim.

    Raises:
        LeadValidationError: the cursor is not one the store issued
        StoreError: the store call failed
    """

    try:
        page = list_lead_page(store, clamp_page_limit(limit), cursor or None)
    except InvalidCursorError as exc:
        raise LeadValidationError("cursor", "Invalid cursor.") from exc

    items = sorted(page.leads, key=lambda lead: lead.created_at, reverse=True)
    logger.debug("Listed %d leads", len(items))
    return LeadPage(items=items, next_cursor=page.next_cursor)


def get_lead(store: KeyValueStore, lead_id: str) -> Lead:
    lead = get_lead_by_id(store, lead_id)
    if lead is None:
        raise LeadNotFoundError(lead_id)
    return lead


def update_processed_flag(store: KeyValueStore, lead_id: str, processed: Any) -> Lead:
    """
    Set the processed flag and return the full updated lead.

    Existence is checked before the flag type, so an unknown id is always
    reported as not found.

    Raises:
        LeadNotFoundError: no lead with this id
        LeadValidationError: `processed` is not a bool
        StoreError: the store call failed
    """

    lead = get_lead(store, lead_id)
    if not isinstance(processed, bool):
        raise LeadValidationError("processed", "processed field must be a boolean")

    updated = lead.with_processed(processed)
    save_lead(store, updated)
    logger.info("Lead %s processed=%s", lead_id, processed)
    return updated


def delete_lead(store: KeyValueStore, lead_id: str) -> dict[str, bool]:
    """Delete a lead. Idempotent: unknown ids are reported as deleted too."""

    delete_lead_by_id(store, lead_id)
    logger.info("Deleted lead %s", lead_id)
    return {"deleted": True}


__all__ = [
    "DEFAULT_PAGE_LIMIT",
    "LeadNotFoundError",
    "LeadPage",
    "LeadValidationError",
    "MAX_PAGE_LIMIT",
    "clamp_page_limit",
    "create_lead",
    "delete_lead",
    "get_lead",
    "is_valid_email",
    "list_leads",
    "update_processed_flag",
    "validate_lead_payload",
]
