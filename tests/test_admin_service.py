"""
Tests for `services/admin_service.py`.
"""

from __future__ import annotations

import pytest

from conftest import valid_payload
from services.admin_service import (
    AllowAllCredentialCheck,
    AuthorizationError,
    PasswordCredentialCheck,
    collect_all_leads,
    credential_check_for,
    filter_leads,
    maturity_distribution,
    require_admin,
)
from services.lead_service import create_lead


def summary(average: float) -> dict:
    return {"areaA": 0, "areaB": 0, "areaC": 0, "average": average}


def test_filter_matches_company_or_contact_case_insensitive(store) -> None:
    a = create_lead(store, valid_payload(company="Alpha Security", contact="Jana Berg"))
    b = create_lead(store, valid_payload(company="Beta AG", contact="Tom Alphonse"))
    create_lead(store, valid_payload(company="Gamma", contact="Eva"))
    leads = collect_all_leads(store)

    assert {lead.id for lead in filter_leads(leads, "ALPH")} == {a.id, b.id}
    assert filter_leads(leads, "  ") == leads
    assert filter_leads(leads, None) == leads
    assert filter_leads(leads, "nobody") == []


def test_maturity_distribution_uses_overall_cutoffs(store) -> None:
    """Verify leads are counted with the 2.5 / 4.5 average cutoffs."""

    for average in (0.0, 2.49, 2.5, 4.49, 4.5, 6.0):
        create_lead(store, valid_payload(scoreSummary=summary(average)))

    counts = maturity_distribution(collect_all_leads(store))

    assert counts == {"low": 2, "medium": 2, "high": 2}


def test_collect_all_leads_walks_every_page(store, clock) -> None:
    """Verify more than one page of leads is collected, newest first."""

    for _ in range(105):
        create_lead(store, valid_payload(), clock=clock)

    leads = collect_all_leads(store)

    assert len(leads) == 105
    assert [lead.created_at for lead in leads] == sorted((lead.created_at for lead in leads), reverse=True)


def test_password_check() -> None:
    check = PasswordCredentialCheck("s3cret")

    assert check.verify("s3cret")
    assert not check.verify("wrong")
    assert not check.verify(None)
    with pytest.raises(ValueError):
        PasswordCredentialCheck("")


def test_empty_password_disables_check() -> None:
    """Verify no configured password means every request passes."""

    assert isinstance(credential_check_for(""), AllowAllCredentialCheck)
    require_admin(credential_check_for(""), None)


def test_require_admin_raises_on_bad_credentials() -> None:
    with pytest.raises(AuthorizationError):
        require_admin(credential_check_for("s3cret"), "guess")
