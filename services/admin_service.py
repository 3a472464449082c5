"""
Admin service: helpers behind the lead review dashboard.

- Walking every page of leads for dashboard summaries
- Free-text filtering of a page of leads by company or contact
- Distribution of leads over the overall maturity levels
- A pluggable credential check for the admin endpoints
"""

from __future__ import annotations

import hmac
import logging
from typing import Dict, Iterable, List, Optional, Protocol

from domain.lead import Lead
from domain.maturity import MaturityLevel, overall_level
from repositories.kv_store import KeyValueStore
from services.lead_service import MAX_PAGE_LIMIT, list_leads

logger = logging.getLogger(__name__)


class AuthorizationError(Exception):
    """Raised when the admin credential check fails."""


class CredentialCheck(Protocol):
    def verify(self, credential: Optional[str]) -> bool: ...


class AllowAllCredentialCheck:
    """Used when no admin password is configured."""

    def verify(self, credential: Optional[str]) -> bool:
        return True


class PasswordCredentialCheck:
    def __init__(self, password: str) -> None:
        if not password:
            raise ValueError("password must not be empty")
        self._password = password.encode("utf-8")

    def verify(self, credential: Optional[str]) -> bool:
        if not credential:
            return False
        return hmac.compare_digest(credential.encode("utf-8"), self._password)


def credential_check_for(password: str) -> CredentialCheck:
    return PasswordCredentialCheck(password) if password else AllowAllCredentialCheck()


def require_admin(check: CredentialCheck, credential: Optional[str]) -> None:
    if not check.verify(credential):
        logger.warning("Rejected admin request with invalid credentials")
        raise AuthorizationError("Invalid admin credentials")


def filter_leads(leads: Iterable[Lead], query: Optional[str]) -> List[Lead]:
    """Case-insensitive substring match on company or contact. Blank query keeps everything."""

    needle = (query or "").strip().lower()
    if not needle:
        return list(leads)
    return [
        lead for lead in leads
        if needle in lead.company.lower() or needle in lead.contact.lower()
    ]


def collect_all_leads(store: KeyValueStore) -> List[Lead]:
    """Walk every page of the `lead:` namespace, newest first overall."""

    leads: List[Lead] = []
    cursor: Optional[str] = None
    while True:
        page = list_leads(store, cursor=cursor, limit=MAX_PAGE_LIMIT)
        leads.extend(page.items)
        if page.next_cursor is None:
            break
        cursor = page.next_cursor
    return sorted(leads, key=lambda lead: lead.created_at, reverse=True)


def maturity_distribution(leads: Iterable[Lead]) -> Dict[str, int]:
    """Count leads per overall maturity level of their average score."""

    counts = {level.value: 0 for level in (MaturityLevel.LOW, MaturityLevel.MEDIUM, MaturityLevel.HIGH)}
    for lead in leads:
        counts[overall_level(lead.score_summary.average).value] += 1
    return counts


__all__ = [
    "AllowAllCredentialCheck",
    "AuthorizationError",
    "CredentialCheck",
    "PasswordCredentialCheck",
    "collect_all_leads",
    "credential_check_for",
    "filter_leads",
    "maturity_distribution",
    "require_admin",
]
