"""
Service Factory
Centralizes wiring of adapters into a ReviewService from configuration.
"""

from lexis.application.config import AppConfig
from lexis.application.review_service import ReviewService
from lexis.domain.review.ports import Clock, ReviewRepository

from .clock import SystemClock
from .shuffle import RandomShuffler
from .yaml_store import YamlReviewRepository


def get_review_repository(config: AppConfig) -> ReviewRepository:
    """Returns the ReviewRepository implementation for the configured store."""
    return YamlReviewRepository(config.store_path)


def get_review_service(config: AppConfig, clock: Clock | None = None) -> ReviewService:
    """Builds a ReviewService wired to the configured store, system clock and shuffler."""
    return ReviewService(
        repo=get_review_repository(config),
        clock=clock or SystemClock(),
        shuffler=RandomShuffler(seed=config.shuffle_seed),
        settings=config.scheduler_settings(),
    )
