"""Tests for the SM-2 scheduler."""

import random
from datetime import datetime

import pytest

from vocabb.application.scheduler import apply_review, clamp_quality, next_ease_factor


class TestSuccessfulReview:
    def test_first_success_keeps_one_day_interval(self, make_item, now):
        item = make_item(interval=1.0, ease_factor=2.5, repetitions=0)

        updated = apply_review(item, 5, now)

        assert updated.repetitions == 1
        assert updated.interval == 1
        assert updated.ease_factor == pytest.approx(2.6)
        assert updated.mastery_level == 1
        assert updated.last_reviewed_at == now
        assert updated.next_review_at == datetime(2026, 3, 11)

    def test_second_success_jumps_to_six_days(self, make_item, now):
        item = make_item(repetitions=1, interval=1.0)

        updated = apply_review(item, 4, now)

        assert updated.interval == 6
        assert updated.repetitions == 2
        assert updated.next_review_at == datetime(2026, 3, 16)

    def test_later_success_multiplies_by_ease(self, make_item, now):
        item = make_item(repetitions=3, interval=6.0, ease_factor=2.5)

        updated = apply_review(item, 4, now)

        assert updated.interval == 15
        assert updated.repetitions == 4

    def test_half_interval_rounds_up(self, make_item, now):
        # 5 * 2.5 = 12.5 -> 13
        item = make_item(repetitions=2, interval=5.0, ease_factor=2.5)

        assert apply_review(item, 3, now).interval == 13

    def test_mastery_caps_at_five(self, make_item, now):
        item = make_item(repetitions=5, interval=30.0, mastery_level=5)

        assert apply_review(item, 5, now).mastery_level == 5


class TestFailedReview:
    def test_failure_resets_progress(self, make_item, now):
        item = make_item(repetitions=4, interval=15.0, mastery_level=3, ease_factor=2.5)

        updated = apply_review(item, 1, now)

        assert updated.repetitions == 0
        assert updated.interval == 1
        assert updated.mastery_level == 2
        assert updated.ease_factor == pytest.approx(1.96)
        assert updated.next_review_at == datetime(2026, 3, 11)

    def test_mastery_floor_is_zero(self, make_item, now):
        item = make_item(mastery_level=0)

        assert apply_review(item, 0, now).mastery_level == 0

    def test_failure_still_updates_ease(self, make_item, now):
        """Quality 2 is a failure but the ease update runs anyway (SM-2)."""
        item = make_item(ease_factor=2.5, repetitions=2, interval=6.0)

        updated = apply_review(item, 2, now)

        assert updated.repetitions == 0
        assert updated.ease_factor == pytest.approx(2.18)


class TestEaseFactor:
    @pytest.mark.parametrize(
        "quality,delta",
        [(0, -0.8), (1, -0.54), (2, -0.32), (3, -0.14), (4, 0.0), (5, 0.1)],
    )
    def test_ease_delta_per_quality(self, quality, delta):
        assert next_ease_factor(2.5, quality) == pytest.approx(2.5 + delta)

    def test_ease_floor(self, make_item, now):
        item = make_item(ease_factor=1.3)

        assert apply_review(item, 0, now).ease_factor == 1.3


def test_quality_is_clamped():
    assert clamp_quality(9) == 5
    assert clamp_quality(-3) == 0
    assert clamp_quality(3) == 3


def test_out_of_range_quality_reviews_as_clamped(make_item, now):
    item = make_item(repetitions=1)

    assert apply_review(item, 7, now) == apply_review(item, 5, now)


def test_input_item_is_not_modified(make_item, now):
    item = make_item(repetitions=2, interval=6.0)

    apply_review(item, 5, now)

    assert item.repetitions == 2
    assert item.interval == 6.0
    assert item.last_reviewed_at is None


def test_same_inputs_give_same_result(make_item, now):
    item = make_item(repetitions=3, interval=10.0, ease_factor=2.2, mastery_level=2)

    assert apply_review(item, 4, now) == apply_review(item, 4, now)


def test_invariants_hold_for_random_review_sequences(make_item, now):
    rng = random.Random(1234)
    for _ in range(50):
        item = make_item()
        for _ in range(30):
            item = apply_review(item, rng.randint(0, 5), now)
            assert item.ease_factor >= 1.3
            assert 0 <= item.mastery_level <= 5
            assert item.interval >= 1
            assert item.repetitions >= 0


def test_drifted_values_are_pulled_back(make_item, now):
    item = make_item(ease_factor=0.9, mastery_level=9, repetitions=1)

    updated = apply_review(item, 5, now)

    assert updated.ease_factor >= 1.3
    assert updated.mastery_level == 5
