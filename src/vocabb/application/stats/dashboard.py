"""
Dashboard calculator for summarizing study progress.

This is a pure computation module with no I/O.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from vocabb.application.activity import compute_forecast, compute_streak
from vocabb.domain.constants import DAILY_GOAL, DEFAULT_FORECAST_DAYS, MASTERED_LEVEL
from vocabb.domain.models import ActivityRecord, VocabularyItem


@dataclass
class MasteryBreakdown:
    mastered: int = 0  # level >= 4
    learning: int = 0  # level 1..3
    new: int = 0  # level 0

    @property
    def total(self) -> int:
        return self.mastered + self.learning + self.new


@dataclass
class DashboardStats:
    """
    Snapshot of study progress shown on the dashboard.
    """

    total_words: int
    due_now: int
    streak: int
    mastery_rate: float  # percent of items at mastered level
    breakdown: MasteryBreakdown
    added_today: int
    reviewed_today: int
    forecast: dict[date, int] = field(default_factory=dict)
    activity_by_type: dict[str, int] = field(default_factory=dict)
    daily_goal: int = DAILY_GOAL

    @property
    def goal_progress(self) -> float:
        """Share of the daily goal met by words added today, capped at 1.0."""
        return min(1.0, self.added_today / self.daily_goal)


class DashboardCalculator:
    """
    Derives dashboard figures from item and activity snapshots.

    Stateless and side-effect free.
    """

    def __init__(
        self, forecast_days: int = DEFAULT_FORECAST_DAYS, daily_goal: int = DAILY_GOAL
    ):
        self.forecast_days = forecast_days
        self.daily_goal = daily_goal

    def summarize(
        self,
        items: list[VocabularyItem],
        records: list[ActivityRecord],
        as_of: datetime | None = None,
    ) -> DashboardStats:
        as_of = as_of or datetime.now()
        today = as_of.date()
        breakdown = self.mastery_breakdown(items)

        return DashboardStats(
            total_words=len(items),
            due_now=self._count_due(items, as_of),
            streak=compute_streak(items, as_of),
            mastery_rate=self._mastery_rate(breakdown),
            breakdown=breakdown,
            added_today=sum(1 for i in items if i.created_at.date() == today),
            reviewed_today=sum(
                1 for i in items if i.last_reviewed_at and i.last_reviewed_at.date() == today
            ),
            forecast=compute_forecast(items, as_of, self.forecast_days),
            activity_by_type=self._activity_by_type(records),
            daily_goal=self.daily_goal,
        )

    def mastery_breakdown(self, items: list[VocabularyItem]) -> MasteryBreakdown:
        breakdown = MasteryBreakdown()
        for item in items:
            if item.mastery_level >= MASTERED_LEVEL:
                breakdown.mastered += 1
            elif item.mastery_level > 0:
                breakdown.learning += 1
            else:
                breakdown.new += 1
        return breakdown

    def _count_due(self, items: list[VocabularyItem], as_of: datetime) -> int:
        # Unscheduled items count as due.
        return sum(1 for i in items if i.next_review_at is None or i.next_review_at <= as_of)

    def _mastery_rate(self, breakdown: MasteryBreakdown) -> float:
        if breakdown.total == 0:
            return 0.0
        return breakdown.mastered / breakdown.total * 100

    def _activity_by_type(self, records: list[ActivityRecord]) -> dict[str, int]:
        totals: dict[str, int] = {}
        for record in records:
            totals[record.type] = totals.get(record.type, 0) + record.count
        return totals
