"""
Domain models for vocabulary items and study activity.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .constants import (
    DEFAULT_CATEGORY,
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL,
)


def _parse_ts(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _format_ts(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class VocabularyItem:
    """
    A learnable unit, keyed by its word.

    Attributes:
        word: Unique key of the item.
        definition: Text shown as the answer / quiz option.
        category: Free-form tag used for filtering ("All" matches every item).
        last_reviewed_at: When the item was last reviewed (None if never).
        next_review_at: When the item is due again (None means due now).
        mastery_level: Learning progress, clamped to 0..5.
        interval: Current SRS interval in days.
        ease_factor: SM-2 ease factor, never below 1.3.
        repetitions: Consecutive successful reviews.
    """

    word: str
    definition: str
    example_sentence: str = ""
    pronunciation: str = ""
    part_of_speech: str = ""
    band_score: float | None = None
    category: str = DEFAULT_CATEGORY
    notes: str = ""

    # Advanced fields
    synonyms: str = ""
    antonyms: str = ""
    collocations: str = ""

    # SRS metadata (owned by the scheduler)
    created_at: datetime = field(default_factory=datetime.now)
    last_reviewed_at: datetime | None = None
    next_review_at: datetime | None = None
    mastery_level: int = 0
    interval: float = DEFAULT_INTERVAL
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = 0

    @classmethod
    def new(cls, word: str, definition: str, now: datetime | None = None, **fields: Any):
        """Create an item that is immediately due for review."""
        now = now or datetime.now()
        return cls(word=word, definition=definition, created_at=now, next_review_at=now, **fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "definition": self.definition,
            "example_sentence": self.example_sentence,
            "pronunciation": self.pronunciation,
            "part_of_speech": self.part_of_speech,
            "band_score": self.band_score,
            "category": self.category,
            "notes": self.notes,
            "synonyms": self.synonyms,
            "antonyms": self.antonyms,
            "collocations": self.collocations,
            "created_at": _format_ts(self.created_at),
            "last_reviewed_at": _format_ts(self.last_reviewed_at),
            "next_review_at": _format_ts(self.next_review_at),
            "mastery_level": self.mastery_level,
            "interval": self.interval,
            "ease_factor": self.ease_factor,
            "repetitions": self.repetitions,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VocabularyItem":
        band = data.get("band_score")
        return cls(
            word=str(data["word"]),
            definition=str(data["definition"]),
            example_sentence=data.get("example_sentence") or "",
            pronunciation=data.get("pronunciation") or "",
            part_of_speech=data.get("part_of_speech") or "",
            band_score=float(band) if band is not None else None,
            category=data.get("category") or DEFAULT_CATEGORY,
            notes=data.get("notes") or "",
            synonyms=data.get("synonyms") or "",
            antonyms=data.get("antonyms") or "",
            collocations=data.get("collocations") or "",
            created_at=_parse_ts(data.get("created_at")) or datetime.now(),
            last_reviewed_at=_parse_ts(data.get("last_reviewed_at")),
            next_review_at=_parse_ts(data.get("next_review_at")),
            mastery_level=int(data.get("mastery_level", 0)),
            interval=float(data.get("interval", DEFAULT_INTERVAL)),
            ease_factor=float(data.get("ease_factor", DEFAULT_EASE_FACTOR)),
            repetitions=int(data.get("repetitions", 0)),
        )


@dataclass
class ActivityRecord:
    """
    Aggregate count of one activity type on one calendar day.

    Attributes:
        date: Start of the day the events happened on.
        type: "Quiz" or "Flashcard".
        count: Number of events, always >= 1.
    """

    date: datetime
    type: str
    count: int = 1

    @property
    def key(self) -> tuple[datetime, str]:
        return (self.date, self.type)

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "type": self.type, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActivityRecord":
        return cls(
            date=datetime.fromisoformat(str(data["date"])),
            type=str(data["type"]),
            count=int(data.get("count", 1)),
        )
