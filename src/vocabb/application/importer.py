"""
Header-driven CSV import and export of vocabulary items.

Recognized columns (case-insensitive): word, definition, examplesentence,
partofspeech, bandscore, category, synonyms, antonyms, collocations.
Only word and definition are required.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from vocabb.domain.constants import DEFAULT_CATEGORY, DEFAULT_PART_OF_SPEECH
from vocabb.domain.exceptions import ImportFormatError
from vocabb.domain.models import VocabularyItem

logger = logging.getLogger(__name__)

# column name -> VocabularyItem attribute
COLUMN_FIELDS = {
    "word": "word",
    "definition": "definition",
    "examplesentence": "example_sentence",
    "partofspeech": "part_of_speech",
    "bandscore": "band_score",
    "category": "category",
    "synonyms": "synonyms",
    "antonyms": "antonyms",
    "collocations": "collocations",
}

EXPORT_HEADER = [
    "word",
    "definition",
    "exampleSentence",
    "partOfSpeech",
    "bandScore",
    "category",
    "synonyms",
    "antonyms",
    "collocations",
]

# Applied only when the column is absent from the header.
MISSING_COLUMN_DEFAULTS = {
    "example_sentence": "",
    "part_of_speech": DEFAULT_PART_OF_SPEECH,
    "band_score": None,
    "category": DEFAULT_CATEGORY,
    "synonyms": "",
    "antonyms": "",
    "collocations": "",
}


@dataclass
class ImportResult:
    items: list[VocabularyItem] = field(default_factory=list)
    skipped_incomplete: int = 0
    skipped_duplicates: int = 0

    @property
    def imported(self) -> int:
        return len(self.items)


def _parse_band_score(raw: str) -> float | None:
    try:
        return float(raw)
    except ValueError:
        return None


def _format_band_score(value: float | None) -> str:
    if value is None:
        return ""
    return repr(float(value))


def _map_header(header: list[str]) -> dict[str, int]:
    """Map known column names to their first position in the header."""
    positions: dict[str, int] = {}
    for idx, name in enumerate(header):
        key = name.strip().lower()
        if key in COLUMN_FIELDS and key not in positions:
            positions[key] = idx
    return positions


def parse_csv(
    text: str,
    existing_words: Iterable[str] = (),
    now: datetime | None = None,
) -> ImportResult:
    """
    Decode CSV text into new vocabulary items.

    Args:
        text: Full CSV content, header row first.
        existing_words: Words already stored; matching rows are skipped.
        now: Creation time stamped on the new items.

    Returns:
        ImportResult with the new items (SRS metadata at defaults) and
        counts of skipped rows.

    Raises:
        ImportFormatError: If the word or definition column is missing.
    """
    now = now or datetime.now()
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    rows = [row for row in reader if any(cell.strip() for cell in row)]
    if not rows:
        raise ImportFormatError("The file is empty.")

    positions = _map_header(rows[0])
    if "word" not in positions or "definition" not in positions:
        raise ImportFormatError(
            "Invalid CSV format. The file must include 'word' and 'definition' columns."
        )

    seen = set(existing_words)
    result = ImportResult()

    for row in rows[1:]:
        values = {}
        for column, idx in positions.items():
            if idx < len(row):
                values[COLUMN_FIELDS[column]] = row[idx].strip()

        word = values.get("word", "")
        definition = values.get("definition", "")
        if not word or not definition:
            result.skipped_incomplete += 1
            continue

        if word in seen:
            result.skipped_duplicates += 1
            continue

        fields = dict(MISSING_COLUMN_DEFAULTS)
        for name in MISSING_COLUMN_DEFAULTS:
            if name in values:
                fields[name] = values[name]
        if "band_score" in values:
            fields["band_score"] = _parse_band_score(values["band_score"])

        result.items.append(VocabularyItem.new(word, definition, now=now, **fields))
        seen.add(word)

    logger.info(
        f"Parsed {result.imported} items "
        f"({result.skipped_duplicates} duplicates, {result.skipped_incomplete} incomplete)"
    )
    return result


def export_csv(items: Iterable[VocabularyItem]) -> str:
    """Encode items as CSV readable by parse_csv. SRS metadata is not exported."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for item in items:
        writer.writerow(
            [
                item.word,
                item.definition,
                item.example_sentence,
                item.part_of_speech,
                _format_band_score(item.band_score),
                item.category,
                item.synonyms,
                item.antonyms,
                item.collocations,
            ]
        )
    return buffer.getvalue()
