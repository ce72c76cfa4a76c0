"""
Activity tracker: daily study events, streaks and review forecasts.

Pure functions over snapshots; callers persist the returned records.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta

from vocabb.application.utils.dates import start_of_day
from vocabb.domain.constants import (
    DEFAULT_FORECAST_DAYS,
    DEFAULT_HEATMAP_WEEKS,
    HEAT_THRESHOLDS,
)
from vocabb.domain.models import ActivityRecord, VocabularyItem

logger = logging.getLogger(__name__)


def index_records(
    records: list[ActivityRecord],
) -> dict[tuple[datetime, str], ActivityRecord]:
    """
    Key records by (day, type).

    Should duplicates exist in the input, their counts are merged.
    """
    index: dict[tuple[datetime, str], ActivityRecord] = {}
    for record in records:
        key = (start_of_day(record.date), record.type)
        if key in index:
            logger.warning(f"Duplicate activity record for {key}, merging counts")
            existing = index[key]
            index[key] = ActivityRecord(existing.date, existing.type, existing.count + record.count)
        else:
            index[key] = ActivityRecord(key[0], record.type, record.count)
    return index


def record_event(
    records: list[ActivityRecord],
    activity_type: str,
    as_of: datetime | None = None,
) -> list[ActivityRecord]:
    """
    Log one study event.

    Increments the (day, type) record or creates it with count 1.

    Returns:
        A new list of records; the input records are not modified.
    """
    day = start_of_day(as_of or datetime.now())
    index = index_records(records)
    key = (day, activity_type)

    if key in index:
        current = index[key]
        index[key] = ActivityRecord(current.date, current.type, current.count + 1)
    else:
        index[key] = ActivityRecord(day, activity_type, 1)

    return list(index.values())


def find_record(
    records: list[ActivityRecord], activity_type: str, as_of: datetime
) -> ActivityRecord | None:
    return index_records(records).get((start_of_day(as_of), activity_type))


def review_days(items: list[VocabularyItem]) -> set[date]:
    return {item.last_reviewed_at.date() for item in items if item.last_reviewed_at}


def compute_streak(items: list[VocabularyItem], as_of: datetime | None = None) -> int:
    """
    Count consecutive days with at least one review, ending today or yesterday.

    A day not yet studied does not break yesterday's streak.
    """
    days = review_days(items)
    if not days:
        return 0

    check = (as_of or datetime.now()).date()
    if check not in days:
        check -= timedelta(days=1)

    streak = 0
    while check in days:
        streak += 1
        check -= timedelta(days=1)
    return streak


def compute_forecast(
    items: list[VocabularyItem],
    as_of: datetime | None = None,
    days_ahead: int = DEFAULT_FORECAST_DAYS,
) -> dict[date, int]:
    """
    Count items coming due on each of the next N days, today included.

    Every day in the window is present in the result, zero-filled.
    """
    today = (as_of or datetime.now()).date()
    forecast = {today + timedelta(days=offset): 0 for offset in range(max(0, days_ahead))}

    for item in items:
        if item.next_review_at is None:
            continue
        day = item.next_review_at.date()
        if day in forecast:
            forecast[day] += 1
    return forecast


def activity_totals(records: list[ActivityRecord]) -> dict[date, int]:
    """Sum activity counts across types per day."""
    totals: dict[date, int] = defaultdict(int)
    for record in records:
        totals[record.date.date()] += record.count
    return dict(totals)


def activity_heatmap(
    records: list[ActivityRecord],
    as_of: datetime | None = None,
    weeks: int = DEFAULT_HEATMAP_WEEKS,
) -> dict[date, int]:
    """
    Daily activity totals for the last N weeks, ending today.

    Days without activity map to 0.
    """
    today = (as_of or datetime.now()).date()
    totals = activity_totals(records)
    span = max(0, weeks) * 7
    start = today - timedelta(days=span - 1) if span else today + timedelta(days=1)

    heatmap: dict[date, int] = {}
    day = start
    while day <= today:
        heatmap[day] = totals.get(day, 0)
        day += timedelta(days=1)
    return heatmap


def heat_level(count: int) -> int:
    """Bucket a daily count into intensity levels 0..4."""
    if count <= 0:
        return 0
    for level, threshold in enumerate(HEAT_THRESHOLDS, start=1):
        if count < threshold:
            return level
    return len(HEAT_THRESHOLDS) + 1
