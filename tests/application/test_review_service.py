"""Tests for the ReviewService orchestrator."""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from lexis.application.review_service import ReviewService
from lexis.domain.constants import SOURCE_BOOK_LIBRARY
from lexis.domain.errors import InvalidQuality, NoCardsAvailable, RecordNotFound
from lexis.domain.review.models import Grade, SchedulerSettings, SessionConfig, VocabularyItem
from lexis.infrastructure.adapters.memory_store import InMemoryReviewRepository
from lexis.infrastructure.adapters.shuffle import IdentityShuffler

USER = "alice"


@pytest.fixture
def repo():
    return InMemoryReviewRepository()


@pytest.fixture
def service(repo, clock):
    return ReviewService(repo=repo, clock=clock, shuffler=IdentityShuffler())


@pytest.mark.asyncio
async def test_add_term_creates_new_record(service, repo, today):
    record = await service.add_term(USER, "ephemeral", "short-lived", category="adjective")

    assert record.id.startswith("rev_")
    assert record.repetitions == 0
    assert record.next_review_date == today
    assert record.category == "adjective"
    assert await repo.get_record(USER, record.id) == record


@pytest.mark.asyncio
async def test_add_term_is_idempotent_case_insensitive(service, repo):
    first = await service.add_term(USER, "Ephemeral", "short-lived")
    second = await service.add_term(USER, "ephemeral", "another definition")

    assert second.id == first.id
    assert second.definition == "short-lived"
    assert len(await repo.list_records(USER)) == 1


@pytest.mark.asyncio
async def test_same_term_in_other_source_is_separate(service, repo):
    await service.add_term(USER, "ephemeral", "short-lived")
    await service.add_term(USER, "ephemeral", "short-lived", source_type=SOURCE_BOOK_LIBRARY)
    assert len(await repo.list_records(USER)) == 2


@pytest.mark.asyncio
async def test_add_term_uses_configured_default_ease(repo, clock):
    service = ReviewService(
        repo, clock, IdentityShuffler(), SchedulerSettings(default_ease_factor=2.3)
    )
    record = await service.add_term(USER, "lucid", "clear")
    assert record.ease_factor == 2.3


@pytest.mark.asyncio
async def test_import_vocabulary_dedupes(service, repo):
    await service.add_term(USER, "lucid", "clear")

    count = await service.import_vocabulary(
        USER,
        [
            VocabularyItem("Lucid", "clear"),
            VocabularyItem("terse", "brief"),
            VocabularyItem("TERSE", "brief again"),
            VocabularyItem("", "no term"),
            VocabularyItem("vapid", ""),
            VocabularyItem("arcane", "obscure", created_at=date(2025, 12, 1)),
        ],
    )

    assert count == 2
    records = {r.term: r for r in await repo.list_records(USER)}
    assert set(records) == {"lucid", "terse", "arcane"}
    assert records["arcane"].created_at == date(2025, 12, 1)


@pytest.mark.asyncio
async def test_import_nothing_new_skips_storage():
    repo = AsyncMock()
    repo.list_records.return_value = []
    service = ReviewService(repo, AsyncMock(), IdentityShuffler())

    assert await service.import_vocabulary(USER, []) == 0
    repo.add_records.assert_not_called()


@pytest.mark.asyncio
async def test_answer_updates_and_persists(service, repo, today):
    record = await service.add_term(USER, "lucid", "clear")

    updated = await service.answer(USER, record.id, Grade.GOOD)

    assert updated.repetitions == 1
    assert updated.interval == 1
    assert updated.correct_count == 1
    assert updated.last_review_date == today
    assert updated.next_review_date == today + timedelta(days=1)
    assert await repo.get_record(USER, record.id) == updated


@pytest.mark.asyncio
async def test_answer_failure_counts_incorrect(service):
    record = await service.add_term(USER, "lucid", "clear")
    updated = await service.answer(USER, record.id, "again")

    assert updated.incorrect_count == 1
    assert updated.correct_count == 0
    assert updated.ease_factor == pytest.approx(1.96)


@pytest.mark.asyncio
async def test_answer_progression_to_mastery(service, clock):
    record = await service.add_term(USER, "lucid", "clear")

    intervals = []
    for _ in range(4):
        record = await service.answer(USER, record.id, Grade.GOOD)
        intervals.append(record.interval)
        clock.advance(record.interval)

    assert intervals == [1, 6, 15, 38]
    assert record.is_mastered is True


@pytest.mark.asyncio
async def test_answer_unknown_record(service):
    with pytest.raises(RecordNotFound):
        await service.answer(USER, "missing", Grade.GOOD)


@pytest.mark.asyncio
async def test_answer_invalid_grade(service):
    record = await service.add_term(USER, "lucid", "clear")
    with pytest.raises(InvalidQuality):
        await service.answer(USER, record.id, "perfect")


@pytest.mark.asyncio
async def test_set_suspended_round_trip(service):
    record = await service.add_term(USER, "lucid", "clear")

    suspended = await service.set_suspended(USER, record.id)
    assert suspended.is_suspended is True

    restored = await service.set_suspended(USER, record.id, suspended=False)
    assert restored.is_suspended is False


@pytest.mark.asyncio
async def test_start_session(service):
    first = await service.add_term(USER, "lucid", "clear")
    await service.add_term(USER, "terse", "brief")
    await service.set_suspended(USER, first.id)

    cards = await service.start_session(USER, SessionConfig(session_size=5))
    assert [c.term for c in cards] == ["terse"]


@pytest.mark.asyncio
async def test_start_session_empty(service):
    with pytest.raises(NoCardsAvailable):
        await service.start_session(USER)


@pytest.mark.asyncio
async def test_preview(service):
    record = await service.add_term(USER, "lucid", "clear")
    previews = await service.preview(USER, record.id)
    assert previews[Grade.EASY] == "1 day"


@pytest.mark.asyncio
async def test_stats_and_prioritized(service):
    lucid = await service.add_term(USER, "lucid", "clear")
    await service.add_term(USER, "terse", "brief")
    await service.answer(USER, lucid.id, Grade.GOOD)

    stats = await service.stats(USER)
    assert stats.total_words == 2
    assert stats.new_words == 1
    assert stats.learning_words == 1

    ordered = await service.prioritized(USER)
    assert [r.term for r in ordered] == ["lucid", "terse"]
