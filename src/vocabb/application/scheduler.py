"""
SRS scheduler implementing a variant of the SM-2 algorithm.

Given an item and a review quality (0 = total blackout, 5 = perfect recall),
computes the next interval, ease factor, mastery level and due date.

This is a pure computation module with no I/O.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime

from vocabb.application.utils.dates import days_after
from vocabb.domain.constants import (
    DEFAULT_INTERVAL,
    MAX_MASTERY,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_MASTERY,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)
from vocabb.domain.models import VocabularyItem

logger = logging.getLogger(__name__)


def clamp_quality(quality: int) -> int:
    """
    Clamp a review quality into 0..5.

    Out-of-range values are a caller error; they are clamped rather than
    rejected so a review is never lost.
    """
    q = int(quality)
    if q < MIN_QUALITY or q > MAX_QUALITY:
        logger.warning(f"Review quality {quality} out of range, clamping")
        q = max(MIN_QUALITY, min(MAX_QUALITY, q))
    return q


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """
    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3.

    Applied on every review, failed ones included.
    """
    penalty = MAX_QUALITY - quality
    ef = ease_factor + (0.1 - penalty * (0.08 + penalty * 0.02))
    return max(MIN_EASE_FACTOR, ef)


def _round_half_up(value: float) -> float:
    # round() in Python rounds half to even; intervals round half away from zero.
    return float(math.floor(value + 0.5))


def apply_review(
    item: VocabularyItem, quality: int, now: datetime | None = None
) -> VocabularyItem:
    """
    Apply one review outcome to an item.

    Args:
        item: The reviewed item. It is not modified.
        quality: Recall quality, 0..5 (clamped).
        now: Review time; defaults to the current local time.

    Returns:
        A copy of the item with updated SRS metadata.
    """
    now = now or datetime.now()
    q = clamp_quality(quality)

    repetitions = item.repetitions
    interval = item.interval
    mastery = item.mastery_level

    if q < PASSING_QUALITY:
        repetitions = 0
        interval = DEFAULT_INTERVAL
        mastery = max(MIN_MASTERY, mastery - 1)
    else:
        if repetitions == 0:
            interval = DEFAULT_INTERVAL
        elif repetitions == 1:
            interval = SECOND_INTERVAL
        else:
            interval = _round_half_up(interval * item.ease_factor)
        repetitions += 1
        mastery = min(MAX_MASTERY, mastery + 1)

    # Drifted stored values are pulled back into range as well.
    mastery = max(MIN_MASTERY, min(MAX_MASTERY, mastery))
    ease = next_ease_factor(item.ease_factor, q)

    updated = replace(
        item,
        last_reviewed_at=now,
        repetitions=repetitions,
        interval=interval,
        mastery_level=mastery,
        ease_factor=ease,
        next_review_at=days_after(now, int(math.floor(interval))),
    )
    logger.debug(
        f"Reviewed '{item.word}' q={q}: interval={interval} ef={ease:.2f} "
        f"reps={repetitions} mastery={mastery}"
    )
    return updated
