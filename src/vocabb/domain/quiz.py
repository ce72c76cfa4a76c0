"""
Domain models for multiple-choice quizzes.
"""

from dataclasses import dataclass, field
from enum import Enum

from ulid import ULID

from .models import VocabularyItem


class QuizState(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


@dataclass(frozen=True)
class QuizQuestion:
    """
    One multiple-choice question.

    Attributes:
        item: The target item whose definition must be picked.
        options: Four definitions in display order.
        correct_index: Position of the target's definition in options.
    """

    item: VocabularyItem
    options: tuple[str, ...]
    correct_index: int

    @property
    def correct_answer(self) -> str:
        return self.options[self.correct_index]


@dataclass(frozen=True)
class IncorrectAttempt:
    word: str
    definition: str
    chosen_answer: str
    attempt_id: str = field(default_factory=lambda: str(ULID()))
