# Domain Package
from .exceptions import ImportFormatError, StoreError, VocabbError
from .models import ActivityRecord, VocabularyItem
from .ports import ItemStore
from .quiz import IncorrectAttempt, QuizQuestion, QuizState

__all__ = [
    "VocabularyItem",
    "ActivityRecord",
    "ItemStore",
    "QuizQuestion",
    "QuizState",
    "IncorrectAttempt",
    "VocabbError",
    "StoreError",
    "ImportFormatError",
]
