from datetime import datetime

from vocabb.domain.models import ActivityRecord, VocabularyItem


def test_new_item_is_immediately_due(now):
    item = VocabularyItem.new("abate", "to lessen", now=now, category="IELTS")

    assert item.created_at == now
    assert item.next_review_at == now
    assert item.last_reviewed_at is None
    assert item.repetitions == 0
    assert item.interval == 1.0
    assert item.ease_factor == 2.5
    assert item.mastery_level == 0
    assert item.category == "IELTS"


def test_item_dict_round_trip(make_item, now):
    item = make_item("abate", band_score=7.0, next_review_at=now, ease_factor=2.36)

    assert VocabularyItem.from_dict(item.to_dict()) == item


def test_item_from_minimal_dict():
    item = VocabularyItem.from_dict({"word": "abate", "definition": "to lessen"})

    assert item.category == "General"
    assert item.next_review_at is None
    assert item.band_score is None


def test_activity_record_key_and_dict():
    record = ActivityRecord(datetime(2026, 3, 10), "Flashcard", 2)

    assert record.key == (datetime(2026, 3, 10), "Flashcard")
    assert ActivityRecord.from_dict(record.to_dict()) == record
