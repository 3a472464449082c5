"""
Results service for the funnel's results step.

Bundles the scores, the overall label and the per-area labels with their
display texts so a client can render the results screen from one call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

from domain.maturity import (
    AreaLabel,
    OverallLabel,
    derive_area_label,
    derive_overall_label,
    get_result_texts,
)
from domain.questions import Language, get_area_details, get_questions
from domain.scoring import Answers, AreaScores, compute_area_scores, compute_average_score


@dataclass(frozen=True, slots=True)
class AreaResult:
    key: str  # "areaA", "areaB" or "areaC"
    title: str
    description: str
    score: int
    label: AreaLabel
    text: str


@dataclass(frozen=True, slots=True)
class QuizResults:
    language: Language
    scores: AreaScores
    average: float
    overall: OverallLabel
    areas: tuple[AreaResult, ...]
    answered_count: int
    total_questions: int


def build_results(answers: Answers, language: Union[Language, str, None] = None) -> QuizResults:
    """
    Compute everything the results screen shows.

    Example:
        results = build_results(session.answers, "en")
        print(results.overall.headline, f"{results.average:.2f}")
    """

    lang = Language.resolve(language)
    scores = compute_area_scores(answers, lang)
    average = compute_average_score(scores)
    details = get_area_details(lang)
    texts = get_result_texts(lang)

    areas = []
    for key, score in scores.as_dict().items():
        label = derive_area_label(score, lang)
        areas.append(AreaResult(
            key=key,
            title=details[key].title,
            description=details[key].description,
            score=score,
            label=label,
            text=texts[label.level],
        ))

    questions = get_questions(lang)
    answered: Dict[str, str] = {k: v for k, v in answers.items() if v and k in questions}

    return QuizResults(
        language=lang,
        scores=scores,
        average=average,
        overall=derive_overall_label(average, lang),
        areas=tuple(areas),
        answered_count=len(answered),
        total_questions=len(questions),
    )


__all__ = ["AreaResult", "QuizResults", "build_results"]
