"""
Domain: Answers state container.

Holds the visitor's selected option per question. The container is injected
with a storage port so the state survives between sessions; it is never a
module-level singleton.

Lifecycle:
- init: load persisted answers, or start from the all-empty state
- mutate: `set_answer` only (each change is saved)
- teardown: `reset` restores the all-empty state and clears storage
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

from .questions import QuestionId

logger = logging.getLogger(__name__)


def initial_answers() -> Dict[str, str]:
    return {question_id.value: "" for question_id in QuestionId}


class AnswersStorage(Protocol):
    """Persistence port for answers."""

    def load(self) -> Optional[Mapping[str, str]]: ...

    def save(self, answers: Mapping[str, str]) -> None: ...

    def clear(self) -> None: ...


class InMemoryAnswersStorage:
    def __init__(self) -> None:
        self._data: Optional[Dict[str, str]] = None

    def load(self) -> Optional[Mapping[str, str]]:
        return dict(self._data) if self._data is not None else None

    def save(self, answers: Mapping[str, str]) -> None:
        self._data = dict(answers)

    def clear(self) -> None:
        self._data = None


class JsonFileAnswersStorage:
    """Stores answers as a JSON object in a single file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Optional[Mapping[str, str]]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable answers file %s", self.path)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring answers file %s: expected a JSON object", self.path)
            return None
        return {str(key): str(value) for key, value in data.items() if isinstance(value, str)}

    def save(self, answers: Mapping[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(dict(answers), ensure_ascii=False), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AnswersStore:
    def __init__(self, storage: Optional[AnswersStorage] = None) -> None:
        self._storage: AnswersStorage = storage if storage is not None else InMemoryAnswersStorage()
        self._answers = initial_answers()

        persisted = self._storage.load()
        if persisted:
            # Unknown keys from older versions are dropped.
            for key, value in persisted.items():
                if key in self._answers:
                    self._answers[key] = value

    @property
    def answers(self) -> Mapping[str, str]:
        """Read-only snapshot of the current answers."""

        return dict(self._answers)

    def get(self, question_id: str) -> str:
        return self._answers[QuestionId(question_id).value]

    def set_answer(self, question_id: str, answer_id: str) -> None:
        """
        Select `answer_id` for `question_id` (empty string unsets it).

        Raises ValueError for a question id outside the catalog.
        """

        key = QuestionId(question_id).value
        self._answers[key] = answer_id or ""
        self._storage.save(self._answers)

    def reset(self) -> None:
        self._answers = initial_answers()
        self._storage.clear()


__all__ = [
    "AnswersStorage",
    "AnswersStore",
    "InMemoryAnswersStorage",
    "JsonFileAnswersStorage",
    "initial_answers",
]
