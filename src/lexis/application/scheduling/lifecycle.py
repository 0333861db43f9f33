"""
Review record lifecycle.

Applies a graded answer to a record and produces the next scheduling state.
This is a pure computation module with no I/O; the current day always comes
from the injected Clock.
"""

from dataclasses import replace
from datetime import timedelta

from lexis.domain.constants import FAILED_INTERVAL, PASSING_QUALITY, SOURCE_TEXT_ANALYSIS
from lexis.domain.review.models import (
    DEFAULT_SETTINGS,
    Grade,
    ReviewUpdate,
    SchedulerSettings,
    VocabularyReviewRecord,
)
from lexis.domain.review.ports import Clock

from .ease import calculate_ease_factor
from .interval import calculate_next_interval
from .quality import map_quality


def update(
    record: VocabularyReviewRecord,
    quality: int,
    clock: Clock,
    settings: SchedulerSettings = DEFAULT_SETTINGS,
) -> ReviewUpdate:
    """
    Calculate all SM-2 parameters after a review.

    The record itself is left untouched; callers fold the result back in
    with apply_update().
    """
    if quality < PASSING_QUALITY:
        # Wrong answer: start the ladder again, ease still drops
        repetitions = 0
        interval = FAILED_INTERVAL
        ease_factor = calculate_ease_factor(record.ease_factor, quality, settings)
    else:
        repetitions = record.repetitions + 1
        ease_factor = calculate_ease_factor(record.ease_factor, quality, settings)
        # The scheduler needs the pre-answer repetition count
        interval = calculate_next_interval(
            record.interval,
            record.repetitions,
            ease_factor,
            quality,
        )

    today = clock.today()
    return ReviewUpdate(
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_date=today + timedelta(days=interval),
        last_review_date=today,
        is_mastered=interval >= settings.mastery_threshold,
        is_correct=quality >= PASSING_QUALITY,
    )


def update_after_answer(
    record: VocabularyReviewRecord,
    grade: Grade | str,
    clock: Clock,
    settings: SchedulerSettings = DEFAULT_SETTINGS,
) -> ReviewUpdate:
    """Map a UI grade to its quality and apply it to the record."""
    return update(record, map_quality(grade), clock, settings)


def apply_update(
    record: VocabularyReviewRecord, result: ReviewUpdate
) -> VocabularyReviewRecord:
    """
    Fold a ReviewUpdate into a new record.

    Also bumps correct_count or incorrect_count. is_suspended, created_at
    and the display fields are carried over unchanged.
    """
    return replace(
        record,
        ease_factor=result.ease_factor,
        interval=result.interval,
        repetitions=result.repetitions,
        next_review_date=result.next_review_date,
        last_review_date=result.last_review_date,
        is_mastered=result.is_mastered,
        correct_count=record.correct_count + (1 if result.is_correct else 0),
        incorrect_count=record.incorrect_count + (0 if result.is_correct else 1),
    )


def create_new_record(
    term: str,
    definition: str,
    clock: Clock,
    settings: SchedulerSettings = DEFAULT_SETTINGS,
    *,
    record_id: str | None = None,
    source_type: str = SOURCE_TEXT_ANALYSIS,
    category: str | None = None,
    source_context: str | None = None,
    difficulty_level: str | None = None,
) -> VocabularyReviewRecord:
    """Create a record with default SM-2 values, due immediately."""
    today = clock.today()
    return VocabularyReviewRecord(
        term=term,
        definition=definition,
        next_review_date=today,
        created_at=today,
        ease_factor=settings.default_ease_factor,
        interval=0,
        repetitions=0,
        id=record_id,
        source_type=source_type,
        category=category,
        source_context=source_context,
        difficulty_level=difficulty_level,
    )


def set_suspended(
    record: VocabularyReviewRecord, suspended: bool = True
) -> VocabularyReviewRecord:
    """Toggle the "don't show again" flag. Scheduling fields are untouched."""
    return replace(record, is_suspended=suspended)


def is_due(record: VocabularyReviewRecord, clock: Clock) -> bool:
    """True if the record is not suspended and its review day has arrived."""
    if record.is_suspended:
        return False
    return record.next_review_date <= clock.today()


def is_new_card(record: VocabularyReviewRecord) -> bool:
    """True if the record has never been answered."""
    return record.repetitions == 0 and record.last_review_date is None
