"""
Quiz engine for multiple-choice definition quizzes.

A session moves Idle -> InProgress -> Complete. Each question shows one
target word with four definitions: its own plus three distractors drawn
from other items in the pool.
"""

import logging
import random
from dataclasses import dataclass, field

from vocabb.application.queue_builder import matches_category
from vocabb.domain.constants import (
    ALL_CATEGORIES,
    QUIZ_MIN_POOL,
    QUIZ_OPTION_COUNT,
    QUIZ_QUESTION_LIMIT,
)
from vocabb.domain.models import VocabularyItem
from vocabb.domain.quiz import IncorrectAttempt, QuizQuestion, QuizState

logger = logging.getLogger(__name__)


@dataclass
class QuizSession:
    """Explicit state of one quiz run."""

    pool: list[VocabularyItem] = field(default_factory=list)
    category: str = ALL_CATEGORIES
    state: QuizState = QuizState.IDLE
    current_question: QuizQuestion | None = None
    score: int = 0
    total_questions: int = 0
    incorrect_attempts: list[IncorrectAttempt] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.state == QuizState.COMPLETE

    @property
    def accuracy(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.score / self.total_questions


class QuizEngine:
    """
    Builds questions and scores answers.

    Stateless apart from its random source; all quiz state lives in the
    QuizSession passed to each call.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        question_limit: int = QUIZ_QUESTION_LIMIT,
    ):
        """
        Args:
            rng: Random source; pass a seeded instance for reproducible quizzes.
            question_limit: Number of questions before the quiz completes.
        """
        self._rng = rng or random.Random()
        self.question_limit = question_limit

    def start(
        self, pool: list[VocabularyItem], category: str = ALL_CATEGORIES
    ) -> QuizSession:
        """
        Start a quiz over the items of a category.

        The session only goes InProgress (with its first question ready)
        when at least four items are available; otherwise it stays Idle.
        """
        filtered = [item for item in pool if matches_category(item, category)]
        session = QuizSession(pool=filtered, category=category)

        if len(filtered) < QUIZ_MIN_POOL:
            logger.info(
                f"Not enough words for a quiz in '{category}': "
                f"{len(filtered)} < {QUIZ_MIN_POOL}"
            )
            return session

        session.state = QuizState.IN_PROGRESS
        self.next_question(session)
        return session

    def next_question(self, session: QuizSession) -> QuizQuestion | None:
        # The pool is a snapshot taken at start, so it cannot shrink mid-session.
        if len(session.pool) < QUIZ_MIN_POOL:
            return None

        target_pos = self._rng.randrange(len(session.pool))
        target = session.pool[target_pos]
        others = [item for pos, item in enumerate(session.pool) if pos != target_pos]
        distractors = self._rng.sample(others, QUIZ_OPTION_COUNT - 1)

        # Shuffle positions, not strings, so duplicate definitions stay unambiguous.
        candidates = [target] + distractors
        order = list(range(len(candidates)))
        self._rng.shuffle(order)

        question = QuizQuestion(
            item=target,
            options=tuple(candidates[i].definition for i in order),
            correct_index=order.index(0),
        )
        session.current_question = question
        session.total_questions += 1
        return question

    def accepts(self, session: QuizSession, selected_index: int) -> bool:
        """Whether an answer at this index can be submitted right now."""
        return self._open_question(session, selected_index) is not None

    def _open_question(self, session: QuizSession, selected_index: int) -> QuizQuestion | None:
        question = session.current_question
        if session.state != QuizState.IN_PROGRESS or question is None:
            logger.warning(f"Answer submitted to a quiz in state {session.state.value}")
            return None
        if not 0 <= selected_index < len(question.options):
            logger.warning(f"Answer index {selected_index} out of range")
            return None
        return question

    def submit_answer(self, session: QuizSession, selected_index: int) -> bool:
        """
        Score an answer and move the session forward.

        Returns:
            True if the answer was correct. Answers on a session that is not
            in progress, or with an index outside the options, are refused
            and return False without changing the session.
        """
        question = self._open_question(session, selected_index)
        if question is None:
            return False

        correct = selected_index == question.correct_index
        if correct:
            session.score += 1
        else:
            session.incorrect_attempts.append(
                IncorrectAttempt(
                    word=question.item.word,
                    definition=question.item.definition,
                    chosen_answer=question.options[selected_index],
                )
            )

        if session.total_questions < self.question_limit:
            self.next_question(session)
        else:
            session.state = QuizState.COMPLETE
            session.current_question = None
            logger.info(f"Quiz complete: {session.score}/{session.total_questions}")

        return correct
