"""
Study services: Application layer orchestrators.

Coordinate the pure engine (scheduler, queue builder, quiz engine, activity
tracker) with an ItemStore: read snapshots, apply engine results, write the
mutations back and save.

Store failures never abort a study session: they are logged and the
session continues with whatever state is already in memory.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from vocabb.application.activity import find_record, record_event
from vocabb.application.queue_builder import ReviewSession, build_review_session
from vocabb.application.quiz import QuizEngine, QuizSession
from vocabb.application.scheduler import apply_review
from vocabb.domain.constants import (
    ACTIVITY_FLASHCARD,
    ACTIVITY_QUIZ,
    ALL_CATEGORIES,
    DUE_BUFFER_SECONDS,
)
from vocabb.domain.exceptions import StoreError
from vocabb.domain.models import ActivityRecord, VocabularyItem
from vocabb.domain.ports import ItemStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def log_activity(store: ItemStore, activity_type: str, now: datetime) -> ActivityRecord | None:
    """
    Increment today's record for an activity type in the store.

    Returns the updated record, or None if the store could not be read.
    """
    try:
        records = store.fetch_activity()
    except StoreError as e:
        logger.error(f"Failed to record activity: {e}")
        return None

    record = find_record(record_event(records, activity_type, now), activity_type, now)
    if record is not None:
        store.insert_activity(record)
    return record


def save_quietly(store: ItemStore) -> bool:
    """Save the store, logging instead of raising on failure."""
    try:
        store.save()
    except StoreError as e:
        logger.error(f"Failed to save: {e}")
        return False
    return True


class ReviewService:
    """
    Runs flashcard review sessions against a store.
    """

    def __init__(
        self,
        store: ItemStore,
        clock: Clock = datetime.now,
        buffer_seconds: float = DUE_BUFFER_SECONDS,
    ):
        self._store = store
        self._clock = clock
        self.buffer_seconds = buffer_seconds

    def start_session(self, category: str = ALL_CATEGORIES) -> ReviewSession:
        """
        Snapshot the due queue. An unreadable store yields an empty session.
        """
        try:
            items = self._store.fetch_all()
        except StoreError as e:
            logger.error(f"Failed to fetch words: {e}")
            return ReviewSession()

        session = build_review_session(items, category, self._clock(), self.buffer_seconds)
        logger.info(f"Review session started with {len(session.items)} due items")
        return session

    def submit(self, session: ReviewSession, quality: int) -> VocabularyItem | None:
        """
        Grade the current item and advance the session.

        Returns:
            The rescheduled item, or None if the session is already complete.
        """
        current = session.current
        if current is None:
            return None

        now = self._clock()
        updated = apply_review(current, quality, now)
        self._store.insert_item(updated)
        session.items[session.index] = updated
        session.reviewed += 1
        session.advance()

        log_activity(self._store, ACTIVITY_FLASHCARD, now)
        save_quietly(self._store)
        return updated


class QuizService:
    """
    Runs quizzes over the stored items and logs answers as activity.
    """

    def __init__(
        self,
        store: ItemStore,
        engine: QuizEngine | None = None,
        clock: Clock = datetime.now,
    ):
        self._store = store
        self.engine = engine or QuizEngine()
        self._clock = clock

    def start(self, category: str = ALL_CATEGORIES) -> QuizSession:
        try:
            pool = self._store.fetch_all()
        except StoreError as e:
            logger.error(f"Failed to fetch words: {e}")
            return QuizSession(category=category)
        return self.engine.start(pool, category)

    def answer(self, session: QuizSession, selected_index: int) -> bool:
        """
        Submit an answer. Refused answers are not logged as activity.
        """
        if not self.engine.accepts(session, selected_index):
            return False

        correct = self.engine.submit_answer(session, selected_index)
        log_activity(self._store, ACTIVITY_QUIZ, self._clock())
        save_quietly(self._store)
        return correct
