"""
Funnel submission service.

Builds the lead payload from the answers and the contact form, and sends it
while holding the session's submission guard:
- a second submit while one is pending is refused
- success moves the session to `thanks` and resets the answers
- failure re-enables the form and re-raises
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from domain.funnel import FunnelSession
from domain.lead import Lead, ScoreSummary
from domain.questions import Language
from domain.scoring import Answers, compute_area_scores, compute_average_score

logger = logging.getLogger(__name__)

CONTACT_FIELDS = (
    "company",
    "contact",
    "employeesRange",
    "email",
    "phone",
    "role",
    "notes",
    "consent",
    "firewallProvider",
    "vpnProvider",
)

LeadSubmitter = Callable[[Mapping[str, Any]], Lead]


def build_lead_payload(
    answers: Answers,
    contact: Mapping[str, Any],
    language: Union[Language, str, None] = None,
    *,
    include_answers: bool = True,
    discount_consent: Optional[bool] = None,
) -> Dict[str, Any]:
    """Creation payload: the contact form fields plus the score summary."""

    scores = compute_area_scores(answers, language)
    selected = {k: v for k, v in answers.items() if v} if include_answers else None
    summary = ScoreSummary.from_scores(
        scores,
        compute_average_score(scores),
        answers=selected,
        discount_consent=discount_consent,
    )

    payload = {key: contact[key] for key in CONTACT_FIELDS if key in contact}
    payload["scoreSummary"] = summary.to_record()
    return payload


def submit_lead(session: FunnelSession, submitter: LeadSubmitter, payload: Mapping[str, Any]) -> Lead:
    """
    Submit `payload` through `submitter` (e.g. `FunnelApiClient.create_lead`).

    Raises FunnelTransitionError when not on the form step or when another
    submission is pending; any error from `submitter` propagates after the
    form is re-enabled.
    """

    session.begin_submission()
    try:
        lead = submitter(payload)
    except Exception:
        session.fail_submission()
        logger.warning("Lead submission failed; form re-enabled")
        raise

    session.complete_submission()
    return lead


__all__ = ["CONTACT_FIELDS", "build_lead_payload", "submit_lead"]
