"""SM-2 ease factor update."""

from lexis.domain.constants import MAX_QUALITY
from lexis.domain.review.models import DEFAULT_SETTINGS, SchedulerSettings


def calculate_ease_factor(
    current_ease: float,
    quality: int,
    settings: SchedulerSettings = DEFAULT_SETTINGS,
) -> float:
    """
    Calculate the ease factor after an answer of the given quality.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at
    settings.min_ease_factor. Applied to failing answers too, so ease
    keeps dropping while a card is being relearned.
    """
    miss = MAX_QUALITY - quality
    new_ease = current_ease + (0.1 - miss * (0.08 + miss * 0.02))
    return max(settings.min_ease_factor, new_ease)
