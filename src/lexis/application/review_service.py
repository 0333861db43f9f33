"""
Review Service — Application layer orchestrator.

Coordinates the storage port with the pure scheduling core: answering
cards, suspending them, building sessions and reporting progress.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from lexis.application.id_service import generate_record_id
from lexis.application.queue_builder import prioritize, select_session
from lexis.application.scheduling import (
    apply_update,
    create_new_record,
    preview_intervals,
    set_suspended,
    update_after_answer,
)
from lexis.application.stats import MetricsCalculator
from lexis.domain.constants import SOURCE_TEXT_ANALYSIS
from lexis.domain.errors import RecordNotFound
from lexis.domain.review.models import (
    DEFAULT_SETTINGS,
    Grade,
    ReviewStats,
    SchedulerSettings,
    SessionConfig,
    VocabularyItem,
    VocabularyReviewRecord,
)
from lexis.domain.review.ports import Clock, ReviewRepository, Shuffler

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for a learner's vocabulary reviews.

    Follows Dependency Inversion: depends on the ReviewRepository, Clock
    and Shuffler abstractions, not concrete adapters.
    """

    def __init__(
        self,
        repo: ReviewRepository,
        clock: Clock,
        shuffler: Shuffler,
        settings: SchedulerSettings | None = None,
    ):
        """
        Args:
            repo: The repository (port) holding review records.
            clock: Source of "today" for every scheduling decision.
            shuffler: Session reordering strategy.
            settings: Optional SM-2 overrides; uses defaults if not provided.
        """
        self._repo = repo
        self._clock = clock
        self._shuffler = shuffler
        self._settings = settings or DEFAULT_SETTINGS

    async def get(self, user_id: str, record_id: str) -> VocabularyReviewRecord:
        """
        Fetch one record.

        Raises:
            RecordNotFound: If the record does not exist.
        """
        record = await self._repo.get_record(user_id, record_id)
        if record is None:
            raise RecordNotFound(user_id, record_id)
        return record

    async def add_term(
        self,
        user_id: str,
        term: str,
        definition: str,
        source_type: str = SOURCE_TEXT_ANALYSIS,
        category: str | None = None,
        source_context: str | None = None,
        difficulty_level: str | None = None,
    ) -> VocabularyReviewRecord:
        """
        Start tracking a term.

        If the user already has the term (case-insensitive) in the same
        source type, the existing record is returned untouched.
        """
        existing = await self._repo.find_by_term(user_id, term, source_type)
        if existing is not None:
            logger.debug(f"Term already tracked: {term!r} ({existing.id})")
            return existing

        record = create_new_record(
            term,
            definition,
            self._clock,
            self._settings,
            record_id=generate_record_id(),
            source_type=source_type,
            category=category,
            source_context=source_context,
            difficulty_level=difficulty_level,
        )
        stored = await self._repo.save_record(user_id, record)
        logger.info(f"Added term {term!r} for user {user_id}")
        return stored

    async def import_vocabulary(self, user_id: str, items: Iterable[VocabularyItem]) -> int:
        """
        Create records for every unseen term in items.

        Terms are deduplicated case-insensitively against existing records
        and within the batch. Items without a term or definition are skipped.

        Returns:
            Number of records created.
        """
        existing = await self._repo.list_records(user_id)
        seen = {(r.term.lower(), r.source_type) for r in existing}

        new_records: list[VocabularyReviewRecord] = []
        for item in items:
            if not item.term or not item.definition:
                continue
            key = (item.term.lower(), item.source_type)
            if key in seen:
                continue
            seen.add(key)

            record = create_new_record(
                item.term,
                item.definition,
                self._clock,
                self._settings,
                record_id=generate_record_id(),
                source_type=item.source_type,
                category=item.category,
                source_context=item.source_context,
                difficulty_level=item.difficulty_level,
            )
            if item.created_at is not None:
                # Older vocabulary keeps its place in the new-card queue
                record = replace(
                    record, created_at=item.created_at, next_review_date=item.created_at
                )
            new_records.append(record)

        if not new_records:
            logger.info(f"No new vocabulary to import for user {user_id}")
            return 0

        count = await self._repo.add_records(user_id, new_records)
        logger.info(f"Imported {count} new terms for user {user_id}")
        return count

    async def answer(
        self, user_id: str, record_id: str, grade: Grade | str
    ) -> VocabularyReviewRecord:
        """
        Apply a graded answer and persist the result.

        Raises:
            RecordNotFound: If the record does not exist.
            InvalidQuality: If grade is not one of the four UI grades.
        """
        record = await self.get(user_id, record_id)
        result = update_after_answer(record, grade, self._clock, self._settings)
        updated = apply_update(record, result)
        stored = await self._repo.save_record(user_id, updated)
        logger.info(
            f"Answered {record.term!r}: interval {record.interval} -> "
            f"{updated.interval}, ease {updated.ease_factor:.2f}"
        )
        return stored

    async def set_suspended(
        self, user_id: str, record_id: str, suspended: bool = True
    ) -> VocabularyReviewRecord:
        """Mark a record as "don't show again", or undo that."""
        record = await self.get(user_id, record_id)
        stored = await self._repo.save_record(user_id, set_suspended(record, suspended))
        logger.info(f"{'Suspended' if suspended else 'Unsuspended'} {record.term!r}")
        return stored

    async def start_session(
        self, user_id: str, config: SessionConfig | None = None
    ) -> list[VocabularyReviewRecord]:
        """
        Build a study session from the user's records.

        Raises:
            NoCardsAvailable: If nothing qualifies.
        """
        pool = await self._repo.list_records(user_id)
        return select_session(pool, config or SessionConfig(), self._shuffler, self._clock)

    async def preview(self, user_id: str, record_id: str) -> dict[Grade, str]:
        record = await self.get(user_id, record_id)
        return preview_intervals(record, self._clock, self._settings)

    async def prioritized(self, user_id: str) -> list[VocabularyReviewRecord]:
        return prioritize(await self._repo.list_records(user_id))

    async def stats(self, user_id: str) -> ReviewStats:
        records = await self._repo.list_records(user_id)
        return MetricsCalculator(self._clock).compute(records)
