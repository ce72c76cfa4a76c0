"""Tests for activity logging, streaks and forecasts."""

from datetime import date, datetime, timedelta

import pytest

from vocabb.application.activity import (
    activity_heatmap,
    compute_forecast,
    compute_streak,
    heat_level,
    index_records,
    record_event,
)
from vocabb.domain.models import ActivityRecord


class TestRecordEvent:
    def test_first_event_creates_record(self, now):
        records = record_event([], "Flashcard", now)

        assert records == [ActivityRecord(datetime(2026, 3, 10), "Flashcard", 1)]

    def test_same_day_and_type_increments(self, now):
        records = record_event([], "Quiz", now)
        records = record_event(records, "Quiz", now + timedelta(hours=2))

        assert len(records) == 1
        assert records[0].count == 2

    def test_types_and_days_are_kept_apart(self, now):
        records = record_event([], "Quiz", now)
        records = record_event(records, "Flashcard", now)
        records = record_event(records, "Quiz", now + timedelta(days=1))

        assert len(records) == 3
        assert {(r.date.day, r.type) for r in records} == {
            (10, "Quiz"),
            (10, "Flashcard"),
            (11, "Quiz"),
        }

    def test_input_records_are_not_modified(self, now):
        before = [ActivityRecord(datetime(2026, 3, 10), "Quiz", 4)]

        updated = record_event(before, "Quiz", now)

        assert before[0].count == 4
        assert updated[0].count == 5

    def test_duplicate_records_are_merged(self):
        day = datetime(2026, 3, 10)
        index = index_records([ActivityRecord(day, "Quiz", 2), ActivityRecord(day, "Quiz", 3)])

        assert index[(day, "Quiz")].count == 5


class TestStreak:
    def _reviewed(self, make_item, now, *days_ago):
        return [
            make_item(f"w{d}", last_reviewed_at=now - timedelta(days=d)) for d in days_ago
        ]

    def test_today_and_yesterday(self, make_item, now):
        assert compute_streak(self._reviewed(make_item, now, 0, 1), now) == 2

    def test_unstudied_today_keeps_yesterdays_streak(self, make_item, now):
        assert compute_streak(self._reviewed(make_item, now, 1, 2, 3), now) == 3

    def test_gap_two_days_ago_stops_count(self, make_item, now):
        assert compute_streak(self._reviewed(make_item, now, 0, 1, 3, 4), now) == 2

    def test_multiple_reviews_on_one_day_count_once(self, make_item, now):
        items = self._reviewed(make_item, now, 0, 0, 0)

        assert compute_streak(items, now) == 1

    def test_no_recent_reviews(self, make_item, now):
        assert compute_streak(self._reviewed(make_item, now, 2, 3), now) == 0
        assert compute_streak([make_item()], now) == 0


class TestForecast:
    def test_counts_items_per_day(self, make_item, now):
        items = [
            make_item("a", next_review_at=now),
            make_item("b", next_review_at=datetime(2026, 3, 11)),
            make_item("c", next_review_at=datetime(2026, 3, 11, 23, 59)),
            make_item("d", next_review_at=datetime(2026, 3, 30)),
            make_item("e", next_review_at=None),
        ]

        forecast = compute_forecast(items, now, days_ahead=7)

        assert len(forecast) == 7
        assert list(forecast)[0] == date(2026, 3, 10)
        assert forecast[date(2026, 3, 10)] == 1
        assert forecast[date(2026, 3, 11)] == 2
        assert sum(forecast.values()) == 3

    def test_overdue_items_are_not_in_forecast(self, make_item, now):
        items = [make_item("old", next_review_at=now - timedelta(days=2))]

        assert sum(compute_forecast(items, now).values()) == 0


class TestHeatmap:
    def test_sums_types_per_day(self, now):
        records = [
            ActivityRecord(datetime(2026, 3, 10), "Quiz", 3),
            ActivityRecord(datetime(2026, 3, 10), "Flashcard", 4),
            ActivityRecord(datetime(2026, 3, 8), "Quiz", 1),
            ActivityRecord(datetime(2026, 1, 1), "Quiz", 9),
        ]

        heatmap = activity_heatmap(records, now, weeks=1)

        assert len(heatmap) == 7
        assert list(heatmap)[-1] == date(2026, 3, 10)
        assert heatmap[date(2026, 3, 10)] == 7
        assert heatmap[date(2026, 3, 8)] == 1
        assert heatmap[date(2026, 3, 9)] == 0

    @pytest.mark.parametrize(
        "count,level", [(0, 0), (1, 1), (4, 1), (5, 2), (9, 2), (10, 3), (19, 3), (20, 4)]
    )
    def test_heat_levels(self, count, level):
        assert heat_level(count) == level
