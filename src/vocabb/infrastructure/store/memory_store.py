"""
In-memory item store, used for throwaway sessions and tests.
"""

from datetime import datetime

from vocabb.domain.models import ActivityRecord, VocabularyItem
from vocabb.domain.ports import ItemStore


class InMemoryItemStore(ItemStore):
    def __init__(
        self,
        items: list[VocabularyItem] | None = None,
        activity: list[ActivityRecord] | None = None,
    ):
        self._items: dict[str, VocabularyItem] = {i.word: i for i in items or []}
        self._activity: dict[tuple[datetime, str], ActivityRecord] = {
            r.key: r for r in activity or []
        }
        self.save_count = 0

    def fetch_all(self) -> list[VocabularyItem]:
        return list(self._items.values())

    def fetch_activity(self) -> list[ActivityRecord]:
        return list(self._activity.values())

    def insert_item(self, item: VocabularyItem) -> None:
        self._items[item.word] = item

    def insert_activity(self, record: ActivityRecord) -> None:
        self._activity[record.key] = record

    def save(self) -> None:
        self.save_count += 1

    def delete_item(self, word: str) -> bool:
        return self._items.pop(word, None) is not None

    def clear(self) -> None:
        self._items.clear()
        self._activity.clear()
