"""
Domain models for vocabulary review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from lexis.domain.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_SESSION_SIZE,
    MASTERY_INTERVAL_THRESHOLD,
    MIN_EASE_FACTOR,
    SOURCE_TEXT_ANALYSIS,
)


class Grade(str, Enum):
    """The four answer buttons shown to the learner."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


@dataclass(frozen=True)
class SchedulerSettings:
    """
    Tunable SM-2 constants.

    Attributes:
        min_ease_factor: Floor applied after every ease update.
        default_ease_factor: Ease given to a freshly created record.
        mastery_threshold: Interval (days) at or above which a record is mastered.
    """

    min_ease_factor: float = MIN_EASE_FACTOR
    default_ease_factor: float = DEFAULT_EASE_FACTOR
    mastery_threshold: int = MASTERY_INTERVAL_THRESHOLD


DEFAULT_SETTINGS = SchedulerSettings()


@dataclass(frozen=True)
class VocabularyReviewRecord:
    """
    One card's scheduling state.

    Attributes:
        term: Word or phrase being learned.
        definition: Display text shown on the back of the card.
        next_review_date: Day the card is next due.
        created_at: Day the record was created. Never changes.
        ease_factor: SM-2 ease, never below the configured floor.
        interval: Days between the last review and next_review_date.
        repetitions: Consecutive successful recalls since the last failure.
        last_review_date: Day of the most recent answer, None until first answered.
        is_suspended: "Don't show again" flag, only set by the suspend toggle.
        is_mastered: Classification stored by the most recent update.
        correct_count: Answers with quality >= 3.
        incorrect_count: Answers with quality < 3.
    """

    term: str
    definition: str
    next_review_date: date
    created_at: date
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0
    last_review_date: date | None = None
    is_suspended: bool = False
    is_mastered: bool = False
    correct_count: int = 0
    incorrect_count: int = 0

    # Storage metadata (opaque to scheduling)
    id: str | None = None
    source_type: str = SOURCE_TEXT_ANALYSIS
    category: str | None = None
    source_context: str | None = None
    difficulty_level: str | None = None


@dataclass(frozen=True)
class ReviewUpdate:
    """Fields produced by applying one graded answer to a record."""

    ease_factor: float
    interval: int
    repetitions: int
    next_review_date: date
    last_review_date: date
    is_mastered: bool
    is_correct: bool


@dataclass(frozen=True)
class SessionConfig:
    """What a study session should draw from and how large it may be."""

    session_size: int = DEFAULT_SESSION_SIZE
    include_due: bool = True
    include_new: bool = True

    def __post_init__(self):
        if self.session_size < 1:
            raise ValueError(f"session_size must be at least 1, got {self.session_size}")


@dataclass
class ReviewStats:
    """Dashboard counters for one user's vocabulary."""

    total_words: int = 0
    mastered_words: int = 0
    learning_words: int = 0
    new_words: int = 0
    due_today: int = 0
    suspended_words: int = 0
    mastery_percentage: float = 0.0


@dataclass
class VocabularyItem:
    """A term handed over by an ingestion collaborator, before it becomes a record."""

    term: str
    definition: str
    source_type: str = SOURCE_TEXT_ANALYSIS
    category: str | None = None
    source_context: str | None = None
    difficulty_level: str | None = None
    created_at: date | None = None
