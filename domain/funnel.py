"""
Domain: Funnel state machine.

Steps: start -> level1 -> level2 -> level3 -> results -> form -> thanks

Transition rules:
- Forward from a quiz level requires every question of that level's
  (dynamically computed) question set to be answered.
- results -> form is unguarded.
- form -> thanks only through a successful submission.
- Back navigation exists only from level1, level2 and level3.
- reset returns to start and clears the answers.

Level membership is computed from the answers on every call and never cached.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Mapping, Optional

from .answers import AnswersStore
from .questions import QuestionId
from .scoring import Answers, uses_vpn

# L1-B options meaning "business-critical processes run (partly) online".
ONLINE_PROCESS_ANSWERS = frozenset({"L1-B-1", "L1-B-2"})

LEVEL1_QUESTIONS: tuple[QuestionId, ...] = (QuestionId.L1_A, QuestionId.L1_B, QuestionId.L1_C)


class FunnelStep(str, Enum):
    START = "start"
    LEVEL1 = "level1"
    LEVEL2 = "level2"
    LEVEL3 = "level3"
    RESULTS = "results"
    FORM = "form"
    THANKS = "thanks"


class FunnelTransitionError(RuntimeError):
    """Raised when a transition is not allowed from the current step."""


_NEXT_STEP: Mapping[FunnelStep, FunnelStep] = {
    FunnelStep.LEVEL1: FunnelStep.LEVEL2,
    FunnelStep.LEVEL2: FunnelStep.LEVEL3,
    FunnelStep.LEVEL3: FunnelStep.RESULTS,
    FunnelStep.RESULTS: FunnelStep.FORM,
}

_PREVIOUS_STEP: Mapping[FunnelStep, FunnelStep] = {
    FunnelStep.LEVEL1: FunnelStep.START,
    FunnelStep.LEVEL2: FunnelStep.LEVEL1,
    FunnelStep.LEVEL3: FunnelStep.LEVEL2,
}


def _answered(answers: Answers, question_id: QuestionId) -> bool:
    return bool(answers.get(question_id.value))


def level1_question_ids(answers: Answers) -> List[QuestionId]:
    return list(LEVEL1_QUESTIONS)


def level2_question_ids(answers: Answers) -> List[QuestionId]:
    """Level 2 questions in display order, based on the L1-A and L1-B answers."""

    question_ids: List[QuestionId] = []
    if uses_vpn(answers):
        question_ids += [QuestionId.L2_A1, QuestionId.L2_A2]
    if answers.get(QuestionId.L1_B.value) in ONLINE_PROCESS_ANSWERS:
        question_ids += [QuestionId.L2_B1, QuestionId.L2_B2]
    question_ids.append(QuestionId.L2_C1)
    return question_ids


def level3_question_ids(answers: Answers) -> List[QuestionId]:
    """Level 3 questions; L3-A1 when VPN is in use, otherwise L3-A1-ALT."""

    remote_access = QuestionId.L3_A1 if uses_vpn(answers) else QuestionId.L3_A1_ALT
    return [remote_access, QuestionId.L3_B1, QuestionId.L3_C1]


def questions_for_step(step: FunnelStep, answers: Answers) -> List[QuestionId]:
    """Question ids shown on a quiz step; empty for non-quiz steps."""

    if step is FunnelStep.LEVEL1:
        return level1_question_ids(answers)
    if step is FunnelStep.LEVEL2:
        return level2_question_ids(answers)
    if step is FunnelStep.LEVEL3:
        return level3_question_ids(answers)
    return []


def is_step_complete(step: FunnelStep, answers: Answers) -> bool:
    return all(_answered(answers, question_id) for question_id in questions_for_step(step, answers))


class FunnelSession:
    """
    One visitor's pass through the funnel.

    Transitions are synchronous. The only suspending operation is the lead
    submission, tracked through `submission_pending` so a second submit is
    refused until the first one resolves.
    """

    def __init__(self, store: Optional[AnswersStore] = None) -> None:
        self.store = store if store is not None else AnswersStore()
        self.step = FunnelStep.START
        self.submission_pending = False

    @property
    def answers(self) -> Mapping[str, str]:
        return self.store.answers

    def current_questions(self) -> List[QuestionId]:
        return questions_for_step(self.step, self.store.answers)

    def set_answer(self, question_id: str, answer_id: str) -> None:
        self.store.set_answer(question_id, answer_id)

    def can_advance(self) -> bool:
        if self.step not in _NEXT_STEP:
            return False
        return is_step_complete(self.step, self.store.answers)

    def start(self) -> FunnelStep:
        if self.step is not FunnelStep.START:
            raise FunnelTransitionError(f"cannot start from step '{self.step.value}'")
        self.step = FunnelStep.LEVEL1
        return self.step

    def advance(self) -> FunnelStep:
        if self.step not in _NEXT_STEP:
            raise FunnelTransitionError(f"cannot advance from step '{self.step.value}'")
        if not is_step_complete(self.step, self.store.answers):
            raise FunnelTransitionError(f"step '{self.step.value}' has unanswered questions")
        self.step = _NEXT_STEP[self.step]
        return self.step

    def back(self) -> FunnelStep:
        if self.step not in _PREVIOUS_STEP:
            raise FunnelTransitionError(f"cannot go back from step '{self.step.value}'")
        self.step = _PREVIOUS_STEP[self.step]
        return self.step

    def begin_submission(self) -> None:
        if self.step is not FunnelStep.FORM:
            raise FunnelTransitionError(f"cannot submit from step '{self.step.value}'")
        if self.submission_pending:
            raise FunnelTransitionError("a submission is already pending")
        self.submission_pending = True

    def complete_submission(self) -> FunnelStep:
        if not self.submission_pending:
            raise FunnelTransitionError("no submission is pending")
        self.submission_pending = False
        self.store.reset()
        self.step = FunnelStep.THANKS
        return self.step

    def fail_submission(self) -> FunnelStep:
        """Re-enable the form after a failed submission."""

        self.submission_pending = False
        return self.step

    def reset(self) -> FunnelStep:
        self.store.reset()
        self.submission_pending = False
        self.step = FunnelStep.START
        return self.step


__all__ = [
    "FunnelSession",
    "FunnelStep",
    "FunnelTransitionError",
    "is_step_complete",
    "level1_question_ids",
    "level2_question_ids",
    "level3_question_ids",
    "questions_for_step",
]
