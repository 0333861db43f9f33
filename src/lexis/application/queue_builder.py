"""
Queue builder for vocabulary study sessions.

Builds bounded study sessions by:
1. Taking due cards (oldest due date first)
2. Topping up with new cards (oldest first)
3. Backfilling from whichever pool the caller excluded
4. Shuffling and truncating to the session size

Also provides the unbounded priority ordering used for review lists.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date

from lexis.application.scheduling.lifecycle import is_new_card
from lexis.domain.errors import NoCardsAvailable
from lexis.domain.review.models import SessionConfig, VocabularyReviewRecord
from lexis.domain.review.ports import Clock, Shuffler

logger = logging.getLogger(__name__)

PoolQuery = Callable[[Iterable[VocabularyReviewRecord], date, int], list[VocabularyReviewRecord]]


def select_due(
    pool: Iterable[VocabularyReviewRecord], today: date, limit: int
) -> list[VocabularyReviewRecord]:
    """
    Previously reviewed, unsuspended records whose review day has arrived.

    Never-reviewed records are excluded even when their next_review_date
    has passed; they only surface through select_new().
    """
    due = [
        r
        for r in pool
        if not r.is_suspended and r.repetitions > 0 and r.next_review_date <= today
    ]
    due.sort(key=lambda r: r.next_review_date)
    return due[:limit]


def select_new(
    pool: Iterable[VocabularyReviewRecord], today: date, limit: int
) -> list[VocabularyReviewRecord]:
    """Unsuspended records with no successful repetitions, oldest first."""
    fresh = [r for r in pool if not r.is_suspended and r.repetitions == 0]
    fresh.sort(key=lambda r: r.created_at)
    return fresh[:limit]


@dataclass(frozen=True)
class SelectionStrategy:
    """One stage of the session pipeline."""

    name: str
    query: PoolQuery


DUE_STRATEGY = SelectionStrategy(name="due", query=select_due)
NEW_STRATEGY = SelectionStrategy(name="new", query=select_new)


def build_pipeline(config: SessionConfig) -> list[SelectionStrategy]:
    """
    Order the selection stages for a session config.

    Requested pools come first (due before new); excluded pools follow as
    backfill, consulted only if the session is still short.
    """
    stages: list[SelectionStrategy] = []
    if config.include_due:
        stages.append(DUE_STRATEGY)
    if config.include_new:
        stages.append(NEW_STRATEGY)

    # Backfill
    if not config.include_due:
        stages.append(DUE_STRATEGY)
    if not config.include_new:
        stages.append(NEW_STRATEGY)
    return stages


def run_pipeline(
    pool: list[VocabularyReviewRecord],
    stages: list[SelectionStrategy],
    session_size: int,
    today: date,
) -> list[VocabularyReviewRecord]:
    """Run each stage for the remaining shortfall and concatenate the results."""
    selected: list[VocabularyReviewRecord] = []

    for stage in stages:
        shortfall = session_size - len(selected)
        if shortfall <= 0:
            break
        picked = stage.query(pool, today, shortfall)
        logger.debug(f"[session] stage={stage.name} wanted={shortfall} picked={len(picked)}")
        selected.extend(picked)

    return selected


def select_session(
    pool: Iterable[VocabularyReviewRecord],
    config: SessionConfig,
    shuffler: Shuffler,
    clock: Clock,
) -> list[VocabularyReviewRecord]:
    """
    Build a bounded, shuffled study session.

    Args:
        pool: All records the learner owns. Not mutated.
        config: Session size and which pools to draw from.
        shuffler: Reorders the combined selection.
        clock: Supplies "today" for the due check.

    Returns:
        At most config.session_size records.

    Raises:
        NoCardsAvailable: If nothing qualifies.
    """
    records = list(pool)
    stages = build_pipeline(config)
    selected = run_pipeline(records, stages, config.session_size, clock.today())

    session = shuffler.shuffle(selected)[: config.session_size]

    if not session:
        raise NoCardsAvailable(
            "No cards available for review. Add more vocabulary to get started."
        )

    logger.debug(f"[session] built session of {len(session)} from pool of {len(records)}")
    return session


def prioritize(pool: Iterable[VocabularyReviewRecord]) -> list[VocabularyReviewRecord]:
    """
    Sort records by review priority.

    Reviewed cards come before new cards. Within each group, earlier due
    dates come first (longest overdue leads), then lower ease factor
    (harder cards first). The input is not modified.
    """
    return sorted(
        pool,
        key=lambda r: (is_new_card(r), r.next_review_date, r.ease_factor),
    )
