"""
Domain: Question catalog for the security check.

The catalog is static. It defines twelve questions across three levels:
- Level 1: three gating questions, one per area (L1-A, L1-B, L1-C).
- Level 2: follow-ups shown depending on the level 1 answers.
- Level 3: closing questions. L3-A1 and L3-A1-ALT are mutually exclusive
  alternates; the funnel decides which one is asked, not the catalog.

Option ids are `<question id>-<n>` and option scores are language independent.
Texts exist in German (default) and English. Unknown language codes fall back
to German.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union


class Language(str, Enum):
    DE = "de"
    EN = "en"

    @staticmethod
    def resolve(value: Union["Language", str, None]) -> "Language":
        """Resolve a language code, falling back to German for anything unknown."""

        if isinstance(value, Language):
            return value
        if isinstance(value, str):
            code = value.strip().lower()[:2]
            for language in Language:
                if language.value == code:
                    return language
        return DEFAULT_LANGUAGE


DEFAULT_LANGUAGE = Language.DE


class QuestionId(str, Enum):
    L1_A = "L1-A"
    L1_B = "L1-B"
    L1_C = "L1-C"
    L2_A1 = "L2-A1"
    L2_A2 = "L2-A2"
    L2_B1 = "L2-B1"
    L2_B2 = "L2-B2"
    L2_C1 = "L2-C1"
    L3_A1 = "L3-A1"
    L3_A1_ALT = "L3-A1-ALT"
    L3_B1 = "L3-B1"
    L3_C1 = "L3-C1"


@dataclass(frozen=True, slots=True)
class AnswerOption:
    id: str
    text: str
    score: int

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError("option score must be >= 0")


@dataclass(frozen=True, slots=True)
class Question:
    id: QuestionId
    text: str
    options: Tuple[AnswerOption, ...]
    subtext: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError(f"question {self.id.value} must have at least one option")
        ids = [option.id for option in self.options]
        if len(set(ids)) != len(ids):
            raise ValueError(f"question {self.id.value} has duplicate option ids")

    def option(self, option_id: str) -> Optional[AnswerOption]:
        """Return the option with the given id, or None."""

        for option in self.options:
            if option.id == option_id:
                return option
        return None


@dataclass(frozen=True, slots=True)
class AreaDetail:
    title: str
    description: str


# Scores per option, in option order. Shared by every language.
_OPTION_SCORES: Dict[QuestionId, Tuple[int, ...]] = {
    QuestionId.L1_A: (2, 1, 0, 0),
    QuestionId.L1_B: (2, 1, 0, 0),
    QuestionId.L1_C: (2, 1, 0, 0),
    QuestionId.L2_A1: (1, 2, 1, 0),
    QuestionId.L2_A2: (0, 1, 2),
    QuestionId.L2_B1: (0, 1, 1, 0),
    QuestionId.L2_B2: (2, 1, 0, 0),
    QuestionId.L2_C1: (0, 1, 2, 0),
    QuestionId.L3_A1: (2, 1, 0),
    QuestionId.L3_A1_ALT: (0, 0, 1),
    QuestionId.L3_B1: (2, 1, 0, 0),
    QuestionId.L3_C1: (0, 1, 2, 0),
}

# (text, subtext, option texts)
_QuestionText = Tuple[str, Optional[str], Sequence[str]]

_TEXTS: Dict[Language, Dict[QuestionId, _QuestionText]] = {
    Language.DE: {
        QuestionId.L1_A: (
            "1. Setzt du heute bereits eine VPN- oder Remote-Access-Lösung für Mitarbeitende ein?",
            None,
            (
                "Ja, für einen Großteil unserer Remote-Nutzer",
                "Ja, aber nur für wenige ausgewählte Mitarbeitende",
                "Nein, wir haben aktuell keine VPN/Remote-Access-Lösung im Einsatz",
                "Ich weiß es nicht",
            ),
        ),
        QuestionId.L1_B: (
            "2. Bildest du geschäftskritische Prozesse über eure Webseite oder Online-Plattformen ab?",
            "(z. B. Kundenportal, Webshop, Terminbuchung, Service-Portal)",
            (
                "Ja, mehrere geschäftskritische Prozesse laufen online",
                "Teilweise, einige Services laufen online, aber vieles noch klassisch/offline",
                "Nein, unsere Webseite ist eher eine Visitenkarte",
                "Ich bin mir nicht sicher",
            ),
        ),
        QuestionId.L1_C: (
            "3. Wie gut sind deine Mitarbeitende aktuell in Bezug auf Phishing, "
            "Social Engineering und IT-Sicherheit geschult?",
            None,
            (
                "Wir führen regelmäßig verpflichtende Awareness-Trainings & Phishing-Simulationen durch",
                "Es gibt gelegentliche Schulungen, aber nicht strukturiert",
                "Schulungen finden so gut wie nicht statt",
                "Ich weiß es nicht",
            ),
        ),
        QuestionId.L2_A1: (
            "1. Welche Lösung setzt du aktuell für VPN oder Remote Access ein?",
            None,
            (
                "Klassisches VPN (z. B. IPsec, OpenVPN, Firewall-VPN)",
                "Zero Trust / Cloud-basierter Zugang (z. B. Cloudflare Access o. ä.)",
                "SSL-VPN oder Remote-Desktop-Gateway",
                "Ich weiß es nicht / Sonstige Lösung",
            ),
        ),
        QuestionId.L2_A2: (
            "... und wie viele Nutzer greifen typischerweise darüber zu?",
            None,
            ("1–20 Nutzer", "21–100 Nutzer", "Über 100 Nutzer"),
        ),
        QuestionId.L2_B1: (
            "2. Wie werden eure geschäftskritischen Online-Dienste bereitgestellt?",
            None,
            (
                "Wir hosten selbst in unserem Rechenzentrum / Serverraum",
                "Wir hosten bei einem Hoster / in der Cloud (z. B. IaaS, Managed Hosting)",
                "Hybrid (eigene Systeme + Cloud/Hosting)",
                "Ich weiß es nicht",
            ),
        ),
        QuestionId.L2_B2: (
            "Setzt ihr bereits Schutzmechanismen wie Web Application Firewall (WAF), "
            "DDoS-Schutz oder CDN vor euren Online-Diensten ein?",
            None,
            (
                "Ja, WAF und DDoS-Schutz sind aktiv",
                "Teilweise, z. B. nur CDN oder einfache Firewall-Regeln",
                "Nein, unsere Web-Dienste sind nicht speziell abgesichert",
                "Ich weiß es nicht",
            ),
        ),
        QuestionId.L2_C1: (
            "3. Hattet ihr in den letzten 24 Monaten bereits mindestens einen Cyber Security Vorfall?",
            "(z. B. Ransomware, erfolgreiche Phishing-Attacke, kompromittierte Konten, Ausfall durch DDoS)",
            (
                "Ja, mehrere",
                "Ja, ein einzelner Vorfall",
                "Nein, keine bekannten Vorfälle",
                "Wir wissen es nicht genau / könnte sein",
            ),
        ),
        QuestionId.L3_A1: (
            "1. Wie zufrieden bist du mit eurer aktuellen VPN-/Remote-Lösung hinsichtlich "
            "Performance, Sicherheit und Usability?",
            None,
            (
                "Sehr zufrieden, läuft stabil, schnell und sicher",
                "Ganz okay, aber wir stoßen immer wieder an Grenzen",
                "Unzufrieden, die Lösung ist langsam, unsicher oder schwer zu administrieren",
            ),
        ),
        QuestionId.L3_A1_ALT: (
            "1. Wie greifen Remote-Mitarbeitende heute auf interne Systeme zu?",
            None,
            (
                "Remote-Zugriff ist aktuell kaum möglich / nur über Workarounds",
                "Es gibt individuelle Lösungen (z. B. direkte RDP, Portfreigaben, TeamViewer etc.)",
                "Wir haben bewusst alles in sichere SaaS-Lösungen verlagert",
            ),
        ),
        QuestionId.L3_B1: (
            "2. Wie gut glaubst du ist eure Infrastruktur gegen Angriffe und Ausfälle geschützt?",
            "(z. B. DDoS, Bots, Exploits, Ausfälle von Webshops/Kundenportalen)",
            (
                "Sehr gut, wir haben mehrschichtige Schutzmechanismen "
                "(z. B. WAF, DDoS-Mitigation, Bot-Management) im Einsatz",
                "Solide, aber wir verlassen uns vor allem auf Standard-Firewalls & Provider-Schutz",
                "Eher schlecht, hier ist definitiv eine Lücke",
                "Ich weiß es nicht",
            ),
        ),
        QuestionId.L3_C1: (
            "3. Ist deinem Unternehmen bereits finanzieller Schaden durch Cyberangriffe, "
            "Betrugsversuche oder Security-Vorfälle entstanden?",
            None,
            (
                "Ja, im deutlich messbaren Bereich (z. B. Umsatzverlust, Lösegeldzahlungen, Ausfallzeiten)",
                "Einige kleinere Vorfälle / indirekte Kosten (Mehraufwand, interne Projekte)",
                "Nein, bislang noch keine bekannten Schäden",
                "Unklar / nicht bekannt",
            ),
        ),
    },
    Language.EN: {
        QuestionId.L1_A: (
            "1. Do you already use a VPN or remote access solution for your employees?",
            None,
            (
                "Yes, for most of our remote users",
                "Yes, but only for a few selected employees",
                "No, we currently have no VPN/remote access solution in place",
                "I don't know",
            ),
        ),
        QuestionId.L1_B: (
            "2. Do you run business-critical processes through your website or online platforms?",
            "(e.g. customer portal, web shop, appointment booking, service portal)",
            (
                "Yes, several business-critical processes run online",
                "Partially, some services run online but much is still offline",
                "No, our website is more of a business card",
                "I'm not sure",
            ),
        ),
        QuestionId.L1_C: (
            "3. How well are your employees currently trained on phishing, social engineering "
            "and IT security?",
            None,
            (
                "We run regular mandatory awareness trainings & phishing simulations",
                "There are occasional trainings, but not structured",
                "Trainings hardly ever take place",
                "I don't know",
            ),
        ),
        QuestionId.L2_A1: (
            "1. Which solution do you currently use for VPN or remote access?",
            None,
            (
                "Classic VPN (e.g. IPsec, OpenVPN, firewall VPN)",
                "Zero Trust / cloud-based access (e.g. Cloudflare Access or similar)",
                "SSL VPN or remote desktop gateway",
                "I don't know / other solution",
            ),
        ),
        QuestionId.L2_A2: (
            "... and how many users typically connect through it?",
            None,
            ("1–20 users", "21–100 users", "More than 100 users"),
        ),
        QuestionId.L2_B1: (
            "2. How are your business-critical online services hosted?",
            None,
            (
                "We host them ourselves in our data center / server room",
                "We host with a provider / in the cloud (e.g. IaaS, managed hosting)",
                "Hybrid (own systems + cloud/hosting)",
                "I don't know",
            ),
        ),
        QuestionId.L2_B2: (
            "Do you already use protection such as a web application firewall (WAF), "
            "DDoS protection or a CDN in front of your online services?",
            None,
            (
                "Yes, WAF and DDoS protection are active",
                "Partially, e.g. only a CDN or simple firewall rules",
                "No, our web services are not specifically protected",
                "I don't know",
            ),
        ),
        QuestionId.L2_C1: (
            "3. Have you had at least one cyber security incident in the last 24 months?",
            "(e.g. ransomware, successful phishing attack, compromised accounts, DDoS outage)",
            (
                "Yes, several",
                "Yes, a single incident",
                "No, no known incidents",
                "We don't know exactly / possibly",
            ),
        ),
        QuestionId.L3_A1: (
            "1. How satisfied are you with your current VPN/remote solution in terms of "
            "performance, security and usability?",
            None,
            (
                "Very satisfied, it runs stable, fast and secure",
                "It's okay, but we keep hitting limits",
                "Dissatisfied, the solution is slow, insecure or hard to administer",
            ),
        ),
        QuestionId.L3_A1_ALT: (
            "1. How do remote employees access internal systems today?",
            None,
            (
                "Remote access is hardly possible / only through workarounds",
                "There are individual solutions (e.g. direct RDP, port forwarding, TeamViewer etc.)",
                "We deliberately moved everything to secure SaaS solutions",
            ),
        ),
        QuestionId.L3_B1: (
            "2. How well do you think your infrastructure is protected against attacks and outages?",
            "(e.g. DDoS, bots, exploits, outages of web shops/customer portals)",
            (
                "Very well, we have multi-layered protection "
                "(e.g. WAF, DDoS mitigation, bot management) in place",
                "Solid, but we mainly rely on standard firewalls & provider protection",
                "Rather poorly, there is definitely a gap here",
                "I don't know",
            ),
        ),
        QuestionId.L3_C1: (
            "3. Has your company already suffered financial damage from cyber attacks, "
            "fraud attempts or security incidents?",
            None,
            (
                "Yes, to a clearly measurable extent (e.g. lost revenue, ransom payments, downtime)",
                "Some smaller incidents / indirect costs (extra effort, internal projects)",
                "No, no known damage so far",
                "Unclear / not known",
            ),
        ),
    },
}

_AREA_DETAILS: Dict[Language, Dict[str, AreaDetail]] = {
    Language.DE: {
        "areaA": AreaDetail(
            "VPN / Remote Access",
            "Sicherheit und Performance für deine Remote-Mitarbeitenden.",
        ),
        "areaB": AreaDetail(
            "Web & Online-Prozesse",
            "Schutz deiner Webseiten und geschäftskritischen Anwendungen.",
        ),
        "areaC": AreaDetail(
            "Mitarbeiter-Sicherheit (Awareness)",
            "Die menschliche Firewall deines Unternehmens stärken.",
        ),
    },
    Language.EN: {
        "areaA": AreaDetail(
            "VPN / Remote Access",
            "Security and performance for your remote employees.",
        ),
        "areaB": AreaDetail(
            "Web & Online Processes",
            "Protecting your websites and business-critical applications.",
        ),
        "areaC": AreaDetail(
            "Employee Security (Awareness)",
            "Strengthening your company's human firewall.",
        ),
    },
}


def _build_question(question_id: QuestionId, language: Language) -> Question:
    text, subtext, option_texts = _TEXTS[language][question_id]
    scores = _OPTION_SCORES[question_id]
    if len(option_texts) != len(scores):
        raise RuntimeError(f"catalog mismatch for {question_id.value} ({language.value})")

    options = tuple(
        AnswerOption(id=f"{question_id.value}-{index}", text=option_text, score=score)
        for index, (option_text, score) in enumerate(zip(option_texts, scores), start=1)
    )
    return Question(id=question_id, text=text, subtext=subtext, options=options)


@lru_cache(maxsize=None)
def _questions_for(language: Language) -> Mapping[QuestionId, Question]:
    return MappingProxyType({qid: _build_question(qid, language) for qid in QuestionId})


def get_questions(language: Union[Language, str, None] = None) -> Mapping[QuestionId, Question]:
    """
    Return the full catalog keyed by question id, in catalog order.

    Keys are `QuestionId` members; since they are `str` enums, plain string
    ids such as "L1-A" look up the same entries.
    """

    return _questions_for(Language.resolve(language))


def get_area_details(language: Union[Language, str, None] = None) -> Mapping[str, AreaDetail]:
    """Title and description per area key (areaA, areaB, areaC)."""

    return MappingProxyType(_AREA_DETAILS[Language.resolve(language)])


__all__ = [
    "AnswerOption",
    "AreaDetail",
    "DEFAULT_LANGUAGE",
    "Language",
    "Question",
    "QuestionId",
    "get_area_details",
    "get_questions",
]
