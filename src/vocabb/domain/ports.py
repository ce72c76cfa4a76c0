"""
Ports (interfaces) for item storage.

These define the contract that infrastructure adapters must implement.
Application services depend on this abstraction, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import ActivityRecord, VocabularyItem


class ItemStore(ABC):
    """
    Port for the key-indexed store holding vocabulary items and activity.

    Implementations:
        - YamlItemStore: Persists everything to a single YAML file.
        - InMemoryItemStore: Keeps data in process memory only.

    Adapters signal failures by raising StoreError.
    """

    @abstractmethod
    def fetch_all(self) -> list[VocabularyItem]:
        """Return a snapshot of every stored vocabulary item."""
        pass

    @abstractmethod
    def fetch_activity(self) -> list[ActivityRecord]:
        """Return a snapshot of every stored activity record."""
        pass

    @abstractmethod
    def insert_item(self, item: VocabularyItem) -> None:
        """
        Insert an item, replacing any stored item with the same word.
        """
        pass

    @abstractmethod
    def insert_activity(self, record: ActivityRecord) -> None:
        """
        Insert an activity record, replacing any record with the same (date, type).
        """
        pass

    @abstractmethod
    def save(self) -> None:
        """Persist pending changes."""
        pass

    @abstractmethod
    def delete_item(self, word: str) -> bool:
        """
        Remove the item with this word.

        Returns:
            True if an item was removed, False if none was stored.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every item and activity record."""
        pass
