"""
Domain: Scoring engine (pure).

Area composition:
- Area A (remote access): L1-A + L2-A1 + L2-A2 + (L3-A1 if VPN is in use, else L3-A1-ALT)
- Area B (web / online processes): L1-B + L2-B1 + L2-B2 + L3-B1
- Area C (staff awareness): L1-C + L2-C1 + L3-C1

Each area is clamped to [0, MAX_AREA_SCORE]. Unanswered questions and option
ids that do not belong to the question contribute 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

from .questions import Language, QuestionId, get_questions

MAX_AREA_SCORE: int = 6

# L1-A options meaning "VPN / remote access is already in use".
VPN_IN_USE_ANSWERS = frozenset({"L1-A-1", "L1-A-2"})

Answers = Mapping[str, Optional[str]]


@dataclass(frozen=True, slots=True)
class AreaScores:
    area_a: int
    area_b: int
    area_c: int

    def as_dict(self) -> dict[str, int]:
        return {"areaA": self.area_a, "areaB": self.area_b, "areaC": self.area_c}


def _answer_for(answers: Answers, question_id: QuestionId) -> Optional[str]:
    return answers.get(question_id.value) or None


def uses_vpn(answers: Answers) -> bool:
    """True when the L1-A answer indicates existing VPN / remote-access usage."""

    return _answer_for(answers, QuestionId.L1_A) in VPN_IN_USE_ANSWERS


def score_for_answer(
    question_id: QuestionId,
    answer_id: Optional[str],
    language: Union[Language, str, None] = None,
) -> int:
    """Score of the selected option, or 0 if unanswered or unknown."""

    if not answer_id:
        return 0
    option = get_questions(language)[question_id].option(answer_id)
    return option.score if option is not None else 0


def _clamp(total: int) -> int:
    return max(0, min(MAX_AREA_SCORE, total))


def compute_area_scores(answers: Answers, language: Union[Language, str, None] = None) -> AreaScores:
    def score(question_id: QuestionId) -> int:
        return score_for_answer(question_id, _answer_for(answers, question_id), language)

    remote_access = QuestionId.L3_A1 if uses_vpn(answers) else QuestionId.L3_A1_ALT

    area_a = (
        score(QuestionId.L1_A)
        + score(QuestionId.L2_A1)
        + score(QuestionId.L2_A2)
        + score(remote_access)
    )
    area_b = (
        score(QuestionId.L1_B)
        + score(QuestionId.L2_B1)
        + score(QuestionId.L2_B2)
        + score(QuestionId.L3_B1)
    )
    area_c = score(QuestionId.L1_C) + score(QuestionId.L2_C1) + score(QuestionId.L3_C1)

    return AreaScores(area_a=_clamp(area_a), area_b=_clamp(area_b), area_c=_clamp(area_c))


def compute_average_score(area_scores: AreaScores) -> float:
    """Arithmetic mean of the three areas. Not rounded."""

    total = area_scores.area_a + area_scores.area_b + area_scores.area_c
    return total / 3


__all__ = [
    "Answers",
    "AreaScores",
    "MAX_AREA_SCORE",
    "VPN_IN_USE_ANSWERS",
    "compute_area_scores",
    "compute_average_score",
    "score_for_answer",
    "uses_vpn",
]
