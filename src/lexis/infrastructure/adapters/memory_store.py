"""
In-Memory Review Repository — Infrastructure adapter backed by a dict.

Used by tests and by embedders that persist records themselves.
"""

import logging
from dataclasses import replace

from lexis.application.id_service import ensure_record_id
from lexis.domain.review.models import VocabularyReviewRecord
from lexis.domain.review.ports import ReviewRepository

logger = logging.getLogger(__name__)


class InMemoryReviewRepository(ReviewRepository):
    """
    Holds records per user in insertion order.

    Records are matched for upsert by id, then by user + term
    (case-insensitive) + source_type.
    """

    def __init__(self, records: dict[str, list[VocabularyReviewRecord]] | None = None):
        self._users: dict[str, dict[str, VocabularyReviewRecord]] = {}
        for user_id, user_records in (records or {}).items():
            for record in user_records:
                self._upsert(user_id, record)

    def _bucket(self, user_id: str) -> dict[str, VocabularyReviewRecord]:
        return self._users.setdefault(user_id, {})

    def _match_term(
        self, user_id: str, term: str, source_type: str
    ) -> VocabularyReviewRecord | None:
        key = term.lower()
        for record in self._bucket(user_id).values():
            if record.term.lower() == key and record.source_type == source_type:
                return record
        return None

    def _upsert(self, user_id: str, record: VocabularyReviewRecord) -> VocabularyReviewRecord:
        bucket = self._bucket(user_id)
        if not (record.id and record.id in bucket):
            existing = self._match_term(user_id, record.term, record.source_type)
            if existing is not None:
                # Same term re-saved without its id: keep the stored identity
                record = replace(record, id=existing.id, created_at=existing.created_at)
            else:
                record = ensure_record_id(record)
        bucket[record.id] = record
        return record

    async def list_records(self, user_id: str) -> list[VocabularyReviewRecord]:
        return sorted(self._bucket(user_id).values(), key=lambda r: r.next_review_date)

    async def get_record(self, user_id: str, record_id: str) -> VocabularyReviewRecord | None:
        return self._bucket(user_id).get(record_id)

    async def find_by_term(
        self, user_id: str, term: str, source_type: str
    ) -> VocabularyReviewRecord | None:
        return self._match_term(user_id, term, source_type)

    async def save_record(
        self, user_id: str, record: VocabularyReviewRecord
    ) -> VocabularyReviewRecord:
        return self._upsert(user_id, record)

    async def add_records(self, user_id: str, records: list[VocabularyReviewRecord]) -> int:
        for record in records:
            self._upsert(user_id, record)
        return len(records)

    async def delete_record(self, user_id: str, record_id: str) -> bool:
        bucket = self._bucket(user_id)
        if record_id not in bucket:
            return False
        del bucket[record_id]
        logger.debug(f"Deleted record {record_id} for user {user_id}")
        return True
