"""
Queue builder for review sessions.

Builds ordered review queues by:
1. Keeping items whose next review time has arrived (with a small buffer)
2. Filtering by category ("All" passes everything)
3. Sorting most overdue first, never-scheduled items at the front
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from vocabb.domain.constants import ALL_CATEGORIES, DUE_BUFFER_SECONDS
from vocabb.domain.models import VocabularyItem

logger = logging.getLogger(__name__)


def matches_category(item: VocabularyItem, category: str) -> bool:
    return category == ALL_CATEGORIES or item.category == category


def is_due(item: VocabularyItem, cutoff: datetime) -> bool:
    return item.next_review_at is None or item.next_review_at <= cutoff


def due_items(
    items: list[VocabularyItem],
    category: str = ALL_CATEGORIES,
    as_of: datetime | None = None,
    buffer_seconds: float = DUE_BUFFER_SECONDS,
) -> list[VocabularyItem]:
    """
    Select the items due for review, most overdue first.

    Args:
        items: Snapshot of all stored items.
        category: Category filter, or "All".
        as_of: Reference time; defaults to now.
        buffer_seconds: Forward buffer so items scheduled for "now" are not
            missed because of clock granularity.

    Returns:
        A new list; later changes to the input do not affect it.
    """
    as_of = as_of or datetime.now()
    cutoff = as_of + timedelta(seconds=buffer_seconds)

    selected = [
        item for item in items if matches_category(item, category) and is_due(item, cutoff)
    ]
    # Stable sort: None (never scheduled) first, then ascending due time.
    selected.sort(key=lambda i: (i.next_review_at is not None, i.next_review_at or cutoff))

    logger.debug(f"{len(selected)}/{len(items)} items due in category '{category}'")
    return selected


@dataclass
class ReviewSession:
    """
    Explicit state of one flashcard review pass.

    The queue is a snapshot taken when the session starts.
    """

    items: list[VocabularyItem] = field(default_factory=list)
    index: int = 0
    showing_answer: bool = False
    reviewed: int = 0

    @property
    def is_complete(self) -> bool:
        return self.index >= len(self.items)

    @property
    def current(self) -> VocabularyItem | None:
        if self.is_complete:
            return None
        return self.items[self.index]

    @property
    def remaining(self) -> int:
        return max(0, len(self.items) - self.index)

    def reveal(self) -> None:
        self.showing_answer = True

    def advance(self) -> None:
        if not self.is_complete:
            self.index += 1
        self.showing_answer = False


def build_review_session(
    items: list[VocabularyItem],
    category: str = ALL_CATEGORIES,
    as_of: datetime | None = None,
    buffer_seconds: float = DUE_BUFFER_SECONDS,
) -> ReviewSession:
    return ReviewSession(items=due_items(items, category, as_of, buffer_seconds))
