"""
Domain: Lead entity.

A Lead is the contact-and-score record submitted at the end of the funnel.

Contract:
- id is an opaque unique string (UUID4 text) assigned at creation.
- created_at is epoch milliseconds (UTC) and never changes.
- email is stored trimmed and lowercased.
- consent is always True for a persisted lead.
- processed is the only field that changes after creation.

The record form (`to_record` / `from_record`) uses camelCase keys; it is both
the storage format and the JSON wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from .scoring import AreaScores


def _number(value: Any) -> float:
    # bool is an int subclass but never a valid score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


@dataclass(frozen=True, slots=True)
class ScoreSummary:
    area_a: float = 0
    area_b: float = 0
    area_c: float = 0
    average: float = 0
    answers: Optional[Mapping[str, str]] = None
    discount_consent: Optional[bool] = None

    @classmethod
    def from_scores(
        cls,
        area_scores: AreaScores,
        average: float,
        answers: Optional[Mapping[str, str]] = None,
        discount_consent: Optional[bool] = None,
    ) -> "ScoreSummary":
        return cls(
            area_a=area_scores.area_a,
            area_b=area_scores.area_b,
            area_c=area_scores.area_c,
            average=average,
            answers=dict(answers) if answers is not None else None,
            discount_consent=discount_consent,
        )

    @classmethod
    def from_record(cls, value: Any) -> "ScoreSummary":
        """Build from a record; anything that is not a mapping yields the zero summary."""

        if not isinstance(value, Mapping):
            return cls()

        answers = value.get("answers")
        if isinstance(answers, Mapping):
            answers = {str(k): str(v) for k, v in answers.items() if isinstance(v, str)}
        else:
            answers = None

        discount_consent = value.get("discountConsent")
        if not isinstance(discount_consent, bool):
            discount_consent = None

        return cls(
            area_a=_number(value.get("areaA")),
            area_b=_number(value.get("areaB")),
            area_c=_number(value.get("areaC")),
            average=_number(value.get("average")),
            answers=answers,
            discount_consent=discount_consent,
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "areaA": self.area_a,
            "areaB": self.area_b,
            "areaC": self.area_c,
            "average": self.average,
        }
        if self.answers is not None:
            record["answers"] = dict(self.answers)
        if self.discount_consent is not None:
            record["discountConsent"] = self.discount_consent
        return record


@dataclass(frozen=True, slots=True)
class Lead:
    id: str
    created_at: int
    company: str
    contact: str
    employees_range: str
    email: str
    phone: str
    consent: bool
    score_summary: ScoreSummary = field(default_factory=ScoreSummary)
    role: str = ""
    notes: str = ""
    processed: bool = False
    firewall_provider: str = ""
    vpn_provider: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must not be empty")
        if self.created_at < 0:
            raise ValueError("created_at must be epoch milliseconds >= 0")
        if self.consent is not True:
            raise ValueError("consent must be True")

    def with_processed(self, processed: bool) -> "Lead":
        return replace(self, processed=processed)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "createdAt": self.created_at,
            "company": self.company,
            "contact": self.contact,
            "employeesRange": self.employees_range,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "notes": self.notes,
            "consent": self.consent,
            "processed": self.processed,
            "firewallProvider": self.firewall_provider,
            "vpnProvider": self.vpn_provider,
            "scoreSummary": self.score_summary.to_record(),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Lead":
        """Rebuild a Lead from its stored record. Missing optional fields get their defaults."""

        def text(key: str, default: str = "") -> str:
            value = record.get(key)
            return value if isinstance(value, str) else default

        return cls(
            id=str(record["id"]),
            created_at=int(record["createdAt"]),
            company=text("company"),
            contact=text("contact"),
            employees_range=text("employeesRange", "N/A"),
            email=text("email"),
            phone=text("phone"),
            role=text("role"),
            notes=text("notes"),
            consent=record.get("consent") is True,
            processed=record.get("processed") is True,
            firewall_provider=text("firewallProvider"),
            vpn_provider=text("vpnProvider"),
            score_summary=ScoreSummary.from_record(record.get("scoreSummary")),
        )


__all__ = ["Lead", "ScoreSummary"]
