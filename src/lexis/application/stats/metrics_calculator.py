"""
Metrics calculator for the review dashboard.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable

from lexis.application.scheduling.lifecycle import is_due
from lexis.domain.review.models import ReviewStats, VocabularyReviewRecord
from lexis.domain.review.ports import Clock


class MetricsCalculator:
    """
    Computes ReviewStats from a user's records.

    Stateless and side-effect free.
    """

    def __init__(self, clock: Clock):
        self._clock = clock

    def compute(self, records: Iterable[VocabularyReviewRecord]) -> ReviewStats:
        """
        Count words by state.

        Suspended words only contribute to total_words and suspended_words.
        """
        stats = ReviewStats()

        for r in records:
            stats.total_words += 1
            if r.is_suspended:
                stats.suspended_words += 1
                continue

            if r.is_mastered:
                stats.mastered_words += 1
            if r.repetitions == 0:
                stats.new_words += 1
            elif not r.is_mastered:
                stats.learning_words += 1
            if is_due(r, self._clock):
                stats.due_today += 1

        stats.mastery_percentage = self._compute_mastery_percentage(stats)
        return stats

    def _compute_mastery_percentage(self, stats: ReviewStats) -> float:
        """
        Mastered words as a share of active (unsuspended) words, 0-100.
        """
        active = stats.total_words - stats.suspended_words
        if active == 0:
            return 0.0
        return stats.mastered_words / active * 100


def compute_review_stats(
    records: Iterable[VocabularyReviewRecord], clock: Clock
) -> ReviewStats:
    return MetricsCalculator(clock).compute(records)
