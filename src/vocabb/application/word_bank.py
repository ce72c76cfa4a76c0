"""
Word bank browsing: the sorted, filterable listing of every stored item.

Pure functions over item snapshots; deleting is left to the ItemStore.
"""

from vocabb.application.queue_builder import matches_category
from vocabb.domain.constants import ALL_CATEGORIES
from vocabb.domain.models import VocabularyItem


def list_categories(items: list[VocabularyItem]) -> list[str]:
    """The "All" pseudo-category followed by every item category, sorted."""
    return [ALL_CATEGORIES] + sorted({item.category for item in items})


def browse(
    items: list[VocabularyItem],
    category: str = ALL_CATEGORIES,
    search: str = "",
) -> list[VocabularyItem]:
    """
    Items of a category whose word contains the search text, sorted by word.

    The search is a case-insensitive substring match on the word only; an
    empty search matches everything.
    """
    needle = search.strip().lower()
    return sorted(
        (
            item
            for item in items
            if matches_category(item, category) and needle in item.word.lower()
        ),
        key=lambda item: item.word,
    )
