"""
Quiz API Endpoints.

Read-only endpoints for the funnel: the question catalog, the questions
visible for a set of answers, and the computed results.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from api.models import (
    AnswerOptionModel,
    AnswersRequest,
    ApiResponse,
    AreaResultModel,
    QuestionModel,
    ResultsModel,
    VisibleQuestionsModel,
)
from domain.funnel import level1_question_ids, level2_question_ids, level3_question_ids
from domain.questions import get_questions
from services.results_service import build_results

router = APIRouter()


@router.get(
    "/questions",
    response_model=ApiResponse[List[QuestionModel]],
    summary="Question Catalog",
    description="All twelve questions in catalog order. Unknown languages fall back to German."
)
def list_questions(lang: Optional[str] = Query(None, description="Language code ('de' or 'en')")):
    questions = [
        QuestionModel(
            id=question.id.value,
            text=question.text,
            subtext=question.subtext,
            options=[
                AnswerOptionModel(id=option.id, text=option.text, score=option.score)
                for option in question.options
            ],
        )
        for question in get_questions(lang).values()
    ]
    return ApiResponse[List[QuestionModel]](success=True, data=questions)


@router.post(
    "/questions/visible",
    response_model=ApiResponse[VisibleQuestionsModel],
    summary="Visible Questions",
    description="Question ids shown on each quiz level for the given answers."
)
def visible_questions(request: AnswersRequest):
    answers = request.answers
    return ApiResponse[VisibleQuestionsModel](
        success=True,
        data=VisibleQuestionsModel(
            level1=[qid.value for qid in level1_question_ids(answers)],
            level2=[qid.value for qid in level2_question_ids(answers)],
            level3=[qid.value for qid in level3_question_ids(answers)],
        ),
    )


@router.post(
    "/results",
    response_model=ApiResponse[ResultsModel],
    summary="Compute Results",
    description="Area scores, average and maturity labels for the given answers."
)
def compute_results(request: AnswersRequest):
    """
    Score a set of answers.

    Unanswered questions and unknown option ids count as 0. Each area is
    capped at 6; the average is not rounded.
    """
    results = build_results(request.answers, request.lang)
    return ApiResponse[ResultsModel](
        success=True,
        data=ResultsModel(
            lang=results.language.value,
            areaA=results.scores.area_a,
            areaB=results.scores.area_b,
            areaC=results.scores.area_c,
            average=results.average,
            level=results.overall.level.value,
            headline=results.overall.headline,
            summary=results.overall.summary,
            areas=[
                AreaResultModel(
                    key=area.key,
                    title=area.title,
                    description=area.description,
                    score=area.score,
                    level=area.label.level.value,
                    label=area.label.text,
                    text=area.text,
                    color=area.label.color,
                    bgColor=area.label.bg_color,
                )
                for area in results.areas
            ],
            answeredCount=results.answered_count,
            totalQuestions=results.total_questions,
        ),
    )
