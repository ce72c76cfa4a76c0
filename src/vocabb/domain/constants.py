"""Centralized constants for the vocabb engine.

All magic numbers and defaults live here so every layer imports from a
single source of truth.
"""

# ---------- SRS (SM-2 variant) ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
DEFAULT_INTERVAL = 1.0
SECOND_INTERVAL = 6.0
PASSING_QUALITY = 3
MIN_QUALITY = 0
MAX_QUALITY = 5
MIN_MASTERY = 0
MAX_MASTERY = 5
MASTERED_LEVEL = 4

# ---------- Review Queue ----------
ALL_CATEGORIES = "All"
DUE_BUFFER_SECONDS = 1.0

# ---------- Quiz ----------
QUIZ_OPTION_COUNT = 4
QUIZ_MIN_POOL = QUIZ_OPTION_COUNT
QUIZ_QUESTION_LIMIT = 10

# ---------- Activity ----------
ACTIVITY_QUIZ = "Quiz"
ACTIVITY_FLASHCARD = "Flashcard"
DEFAULT_FORECAST_DAYS = 7
DEFAULT_HEATMAP_WEEKS = 20
HEAT_THRESHOLDS = (5, 10, 20)
DAILY_GOAL = 20

# ---------- Import ----------
DEFAULT_CATEGORY = "General"
DEFAULT_PART_OF_SPEECH = "Noun"
IMPORT_COLUMNS = [
    "word",
    "definition",
    "examplesentence",
    "partofspeech",
    "bandscore",
    "category",
    "synonyms",
    "antonyms",
    "collocations",
]
