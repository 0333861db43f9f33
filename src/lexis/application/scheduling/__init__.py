# Application Scheduling Package
from .ease import calculate_ease_factor
from .interval import calculate_next_interval, round_half_up
from .lifecycle import (
    apply_update,
    create_new_record,
    is_due,
    is_new_card,
    set_suspended,
    update,
    update_after_answer,
)
from .preview import describe_interval, preview_intervals
from .quality import map_quality, parse_grade

__all__ = [
    "map_quality",
    "parse_grade",
    "calculate_ease_factor",
    "calculate_next_interval",
    "round_half_up",
    "update",
    "update_after_answer",
    "apply_update",
    "create_new_record",
    "set_suspended",
    "is_due",
    "is_new_card",
    "describe_interval",
    "preview_intervals",
]
