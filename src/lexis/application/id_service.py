"""Service for managing stable ids for review records."""

from dataclasses import replace

from ulid import ULID

from lexis.domain.review.models import VocabularyReviewRecord


def generate_record_id() -> str:
    """Generate a stable record id using ULID."""
    return f"rev_{ULID()}"


def ensure_record_id(record: VocabularyReviewRecord) -> VocabularyReviewRecord:
    """Return the record unchanged if it has an id, else a copy with a fresh one."""
    if record.id:
        return record
    return replace(record, id=generate_record_id())
