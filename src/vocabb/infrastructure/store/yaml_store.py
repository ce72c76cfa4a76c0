"""
YAML Item Store: Infrastructure adapter persisting to a single YAML file.

Layout:
    items:    list of VocabularyItem dicts
    activity: list of ActivityRecord dicts

Entries that fail to parse are kept verbatim and written back on save, so a
single bad field never costs the rest of the entry.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml  # type: ignore

from vocabb.domain.exceptions import StoreError
from vocabb.domain.models import ActivityRecord, VocabularyItem
from vocabb.domain.ports import ItemStore

logger = logging.getLogger(__name__)


class YamlItemStore(ItemStore):
    """
    Keeps the file contents in memory after the first load; save() rewrites
    the whole file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._items: dict[str, VocabularyItem] | None = None
        self._activity: dict[tuple[datetime, str], ActivityRecord] = {}
        self._unparsed_items: list[Any] = []
        self._unparsed_activity: list[Any] = []

    def _load(self) -> dict[str, VocabularyItem]:
        if self._items is None:
            self._items = self._read()
        return self._items

    def _read(self) -> dict[str, VocabularyItem]:
        items: dict[str, VocabularyItem] = {}
        self._activity = {}
        self._unparsed_items = []
        self._unparsed_activity = []

        if not self.path.exists():
            logger.debug(f"No store at {self.path}, starting empty")
            return items

        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise StoreError(f"Could not read {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise StoreError(f"Unexpected content in {self.path}: expected a mapping")

        for entry in raw.get("items") or []:
            try:
                item = VocabularyItem.from_dict(entry)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Keeping unreadable item in {self.path} as is: {e}")
                self._unparsed_items.append(entry)
                continue
            items[item.word] = item

        for entry in raw.get("activity") or []:
            try:
                record = ActivityRecord.from_dict(entry)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Keeping unreadable activity record in {self.path} as is: {e}")
                self._unparsed_activity.append(entry)
                continue
            self._activity[record.key] = record

        return items

    def _drop_unparsed(self, word: str) -> int:
        before = len(self._unparsed_items)
        self._unparsed_items = [
            entry
            for entry in self._unparsed_items
            if not (isinstance(entry, dict) and entry.get("word") == word)
        ]
        return before - len(self._unparsed_items)

    def fetch_all(self) -> list[VocabularyItem]:
        return list(self._load().values())

    def fetch_activity(self) -> list[ActivityRecord]:
        self._load()
        return list(self._activity.values())

    def insert_item(self, item: VocabularyItem) -> None:
        items = self._load()
        # A valid item supersedes an unreadable entry for the same word.
        self._drop_unparsed(item.word)
        items[item.word] = item

    def insert_activity(self, record: ActivityRecord) -> None:
        self._load()
        self._activity[record.key] = record

    def delete_item(self, word: str) -> bool:
        items = self._load()
        removed = items.pop(word, None) is not None
        return self._drop_unparsed(word) > 0 or removed

    def clear(self) -> None:
        self._items = {}
        self._activity = {}
        self._unparsed_items = []
        self._unparsed_activity = []

    def save(self) -> None:
        items = self._load()
        data: dict[str, Any] = {
            "items": [item.to_dict() for item in items.values()] + self._unparsed_items,
            "activity": [record.to_dict() for record in self._activity.values()]
            + self._unparsed_activity,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(
                yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8"
            )
            tmp.replace(self.path)
        except OSError as e:
            raise StoreError(f"Could not write {self.path}: {e}") from e
        logger.debug(f"Saved {len(data['items'])} items to {self.path}")
