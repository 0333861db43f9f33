# Domain Review Package
from .models import (
    DEFAULT_SETTINGS,
    Grade,
    ReviewStats,
    ReviewUpdate,
    SchedulerSettings,
    SessionConfig,
    VocabularyItem,
    VocabularyReviewRecord,
)
from .ports import Clock, ReviewRepository, Shuffler

__all__ = [
    "DEFAULT_SETTINGS",
    "Grade",
    "ReviewStats",
    "ReviewUpdate",
    "SchedulerSettings",
    "SessionConfig",
    "VocabularyItem",
    "VocabularyReviewRecord",
    "Clock",
    "Shuffler",
    "ReviewRepository",
]
