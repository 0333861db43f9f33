"""Non-mutating "what if" projection of the next interval for each grade."""

from lexis.domain.constants import DAYS_PER_MONTH, DAYS_PER_WEEK, DAYS_PER_YEAR
from lexis.domain.review.models import (
    DEFAULT_SETTINGS,
    Grade,
    SchedulerSettings,
    VocabularyReviewRecord,
)
from lexis.domain.review.ports import Clock

from .interval import round_half_up
from .lifecycle import update_after_answer


def _plural(count: int, unit: str) -> str:
    return f"1 {unit}" if count == 1 else f"{count} {unit}s"


def describe_interval(days: int) -> str:
    """Human-readable interval: "New", "3 days", "2 weeks", "1 month", "4 years"."""
    if days == 0:
        return "New"
    if days == 1:
        return "1 day"
    if days < DAYS_PER_WEEK:
        return f"{days} days"
    if days < DAYS_PER_MONTH:
        return _plural(round_half_up(days / DAYS_PER_WEEK), "week")
    if days < DAYS_PER_YEAR:
        return _plural(round_half_up(days / DAYS_PER_MONTH), "month")
    return _plural(round_half_up(days / DAYS_PER_YEAR), "year")


def preview_intervals(
    record: VocabularyReviewRecord,
    clock: Clock,
    settings: SchedulerSettings = DEFAULT_SETTINGS,
) -> dict[Grade, str]:
    """Describe the interval each of the four grades would produce."""
    return {
        grade: describe_interval(update_after_answer(record, grade, clock, settings).interval)
        for grade in Grade
    }
