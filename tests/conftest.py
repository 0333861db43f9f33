import os
from dataclasses import replace
from datetime import date

import pytest

from lexis.domain.review.models import VocabularyReviewRecord
from lexis.infrastructure.adapters.clock import FixedClock

TODAY = date(2026, 3, 10)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def make_record():
    """Factory for records; anything not given gets new-card defaults."""

    def _make(term: str = "ephemeral", **overrides) -> VocabularyReviewRecord:
        base = VocabularyReviewRecord(
            term=term,
            definition=f"definition of {term}",
            next_review_date=TODAY,
            created_at=date(2026, 1, 1),
            id=f"id-{term}",
        )
        return replace(base, **overrides)

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config files and LEXIS_* settings from the developer machine
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("LEXIS_"):
            monkeypatch.delenv(key)
    return home
