from datetime import datetime

import pytest

from vocabb.domain.models import VocabularyItem

NOW = datetime(2026, 3, 10, 14, 30, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_item():
    """Factory for vocabulary items with sensible defaults."""

    def _make(word="word", definition=None, **fields):
        fields.setdefault("created_at", NOW)
        return VocabularyItem(word=word, definition=definition or f"meaning of {word}", **fields)

    return _make


@pytest.fixture
def word_pool(make_item):
    return [
        make_item("abate", "to lessen in intensity"),
        make_item("benign", "gentle and kind"),
        make_item("cogent", "clear and convincing"),
        make_item("dearth", "a scarcity or lack"),
        make_item("ephemeral", "lasting a very short time"),
    ]


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    return home
