"""
Domain: Maturity classification.

Two classifications with different cutoffs:
- Per area (0-6 integer score): >= 5 high, >= 3 medium, else low.
- Overall (continuous 0-6 average): >= 4.5 high, >= 2.5 medium, else low.

Both sets of cutoffs are product-defined and inclusive at the lower bound.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple, Union

from .questions import Language

AREA_HIGH_THRESHOLD: int = 5
AREA_MEDIUM_THRESHOLD: int = 3
OVERALL_HIGH_THRESHOLD: float = 4.5
OVERALL_MEDIUM_THRESHOLD: float = 2.5


class MaturityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class AreaLabel:
    """Per-area classification with display metadata."""

    level: MaturityLevel
    text: str
    color: str
    bg_color: str


@dataclass(frozen=True, slots=True)
class OverallLabel:
    """Overall classification with long-form headline and summary."""

    level: MaturityLevel
    headline: str
    summary: str


# (color, bg_color)
_AREA_STYLES: Dict[MaturityLevel, Tuple[str, str]] = {
    MaturityLevel.HIGH: ("text-green-700 dark:text-green-300", "bg-green-100 dark:bg-green-900/50"),
    MaturityLevel.MEDIUM: ("text-yellow-700 dark:text-yellow-300", "bg-yellow-100 dark:bg-yellow-900/50"),
    MaturityLevel.LOW: ("text-red-700 dark:text-red-300", "bg-red-100 dark:bg-red-900/50"),
}

_AREA_TEXTS: Dict[Language, Dict[MaturityLevel, str]] = {
    Language.DE: {
        MaturityLevel.HIGH: "Geringes Risiko / Hohe Reife",
        MaturityLevel.MEDIUM: "Mittleres Risiko / Mittlere Reife",
        MaturityLevel.LOW: "Hohes Risiko / Niedrige Reife",
    },
    Language.EN: {
        MaturityLevel.HIGH: "Low risk / High maturity",
        MaturityLevel.MEDIUM: "Medium risk / Medium maturity",
        MaturityLevel.LOW: "High risk / Low maturity",
    },
}

_OVERALL_TEXTS: Dict[Language, Dict[MaturityLevel, Tuple[str, str]]] = {
    Language.DE: {
        MaturityLevel.HIGH: (
            "Dein Security-Check: Solide aufgestellt, jetzt optimieren",
            "Dein Unternehmen ist in vielen Bereichen bereits gut aufgestellt. Nutze die Chance, "
            "um durch gezielte Optimierungen mit modernen Cloud-Technologien deinen Vorsprung "
            "weiter auszubauen und deine Resilienz zu maximieren.",
        ),
        MaturityLevel.MEDIUM: (
            "Dein Security-Check: Mittleres Risiko, gute Basis, Luft nach oben",
            "Dein Unternehmen ist in einigen Bereichen bereits gut aufgestellt, in anderen gibt es "
            "deutlichen Nachholbedarf, insbesondere dort, wo Remote-Zugänge, geschäftskritische "
            "Web-Anwendungen oder Security Awareness noch nicht optimal abgesichert sind.",
        ),
        MaturityLevel.LOW: (
            "Dein Security-Check: Hoher Handlungsbedarf",
            "Unsere Analyse zeigt kritische Lücken in mehreren Bereichen deiner IT-Sicherheit. "
            "Es besteht akuter Handlungsbedarf, um dein Unternehmen wirksam gegen Cyberangriffe, "
            "Ausfälle und Datenverlust zu schützen.",
        ),
    },
    Language.EN: {
        MaturityLevel.HIGH: (
            "Your security check: Well positioned, now optimize",
            "Your company is already well positioned in many areas. Use the opportunity to extend "
            "your lead with targeted optimizations based on modern cloud technologies and to "
            "maximize your resilience.",
        ),
        MaturityLevel.MEDIUM: (
            "Your security check: Medium risk, good foundation, room to improve",
            "Your company is well positioned in some areas, while others clearly need work, "
            "especially where remote access, business-critical web applications or security "
            "awareness are not yet properly protected.",
        ),
        MaturityLevel.LOW: (
            "Your security check: Urgent action required",
            "Our analysis shows critical gaps in several areas of your IT security. Urgent action "
            "is needed to protect your company effectively against cyber attacks, outages and "
            "data loss.",
        ),
    },
}

_RESULT_TEXTS: Dict[Language, Dict[MaturityLevel, str]] = {
    Language.DE: {
        MaturityLevel.LOW: "In diesem Bereich besteht ein erhöhtes Risiko. Angriffe oder Ausfälle "
        "könnten schnell geschäftskritische Auswirkungen haben.",
        MaturityLevel.MEDIUM: "Du hast eine Basis geschaffen, profitierst aber deutlich von modernen "
        "Zero-Trust- und Cloud-Security-Ansätzen.",
        MaturityLevel.HIGH: "Hier bist du bereits weit fortgeschritten. Wir können dir helfen, diesen "
        "Vorsprung effizient zu sichern und weiter auszubauen.",
    },
    Language.EN: {
        MaturityLevel.LOW: "This area carries an elevated risk. Attacks or outages could quickly "
        "have a business-critical impact.",
        MaturityLevel.MEDIUM: "You have laid a foundation, but would clearly benefit from modern "
        "Zero Trust and cloud security approaches.",
        MaturityLevel.HIGH: "You are already well advanced here. We can help you secure and extend "
        "this lead efficiently.",
    },
}


def area_level(score: float) -> MaturityLevel:
    if score >= AREA_HIGH_THRESHOLD:
        return MaturityLevel.HIGH
    if score >= AREA_MEDIUM_THRESHOLD:
        return MaturityLevel.MEDIUM
    return MaturityLevel.LOW


def overall_level(average_score: float) -> MaturityLevel:
    if average_score >= OVERALL_HIGH_THRESHOLD:
        return MaturityLevel.HIGH
    if average_score >= OVERALL_MEDIUM_THRESHOLD:
        return MaturityLevel.MEDIUM
    return MaturityLevel.LOW


def derive_area_label(score: float, language: Union[Language, str, None] = None) -> AreaLabel:
    level = area_level(score)
    color, bg_color = _AREA_STYLES[level]
    text = _AREA_TEXTS[Language.resolve(language)][level]
    return AreaLabel(level=level, text=text, color=color, bg_color=bg_color)


def derive_overall_label(average_score: float, language: Union[Language, str, None] = None) -> OverallLabel:
    level = overall_level(average_score)
    headline, summary = _OVERALL_TEXTS[Language.resolve(language)][level]
    return OverallLabel(level=level, headline=headline, summary=summary)


def get_result_texts(language: Union[Language, str, None] = None) -> Mapping[MaturityLevel, str]:
    """Short explanatory text per level, shown under each area label."""

    return MappingProxyType(_RESULT_TEXTS[Language.resolve(language)])


__all__ = [
    "AreaLabel",
    "MaturityLevel",
    "OverallLabel",
    "area_level",
    "derive_area_label",
    "derive_overall_label",
    "get_result_texts",
    "overall_level",
]
