"""SM-2 interval ladder."""

import math

from lexis.domain.constants import (
    FAILED_INTERVAL,
    FIRST_INTERVAL,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    The builtin round() uses banker's rounding (2.5 -> 2), which would
    shift some intervals by a day.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def calculate_next_interval(
    current_interval: int,
    repetitions: int,
    ease_factor: float,
    quality: int,
) -> int:
    """
    Calculate the next review interval in days.

    Args:
        current_interval: Interval before this answer.
        repetitions: Repetition count before this answer.
        ease_factor: Ease factor after this answer.
        quality: SM-2 quality (0-5).
    """
    if quality < PASSING_QUALITY:
        return FAILED_INTERVAL

    if repetitions == 0:
        return FIRST_INTERVAL

    if repetitions == 1:
        return SECOND_INTERVAL

    return round_half_up(current_interval * ease_factor)
