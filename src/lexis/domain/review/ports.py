"""
Ports (interfaces) for the review core.

These define the contract that infrastructure adapters must implement.
Scheduling functions and application services depend on these abstractions,
not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import TypeVar

from .models import VocabularyReviewRecord

T = TypeVar("T")


class Clock(ABC):
    """
    Port for reading the current calendar day.

    Implementations:
        - SystemClock: Local wall-clock date.
        - FixedClock: A pinned date, for tests and replays.
    """

    @abstractmethod
    def today(self) -> date:
        """Return the current day (time of day is never relevant to scheduling)."""
        pass


class Shuffler(ABC):
    """
    Port for reordering a study session.

    Implementations:
        - RandomShuffler: Uniform shuffle, optionally seeded.
        - IdentityShuffler: Keeps the selection order.
    """

    @abstractmethod
    def shuffle(self, items: list[T]) -> list[T]:
        """Return a reordered copy of items. Must not mutate the input."""
        pass


class ReviewRepository(ABC):
    """
    Port for persisting review records, keyed by user.

    Implementations:
        - InMemoryReviewRepository: Process-local dict, for tests and embedding.
        - YamlReviewRepository: A single YAML file on disk.
    """

    @abstractmethod
    async def list_records(self, user_id: str) -> list[VocabularyReviewRecord]:
        """
        Fetch every record for a user.

        Returns:
            Records ordered by next_review_date ascending.
        """
        pass

    @abstractmethod
    async def get_record(self, user_id: str, record_id: str) -> VocabularyReviewRecord | None:
        """Fetch one record by id, or None if it does not exist."""
        pass

    @abstractmethod
    async def find_by_term(
        self, user_id: str, term: str, source_type: str
    ) -> VocabularyReviewRecord | None:
        """Fetch the record for a term (case-insensitive) within a source type."""
        pass

    @abstractmethod
    async def save_record(
        self, user_id: str, record: VocabularyReviewRecord
    ) -> VocabularyReviewRecord:
        """
        Insert or replace a record.

        Records are matched on user + term + source_type. The stored
        record (with its id) is returned.
        """
        pass

    @abstractmethod
    async def add_records(
        self, user_id: str, records: list[VocabularyReviewRecord]
    ) -> int:
        """Insert many new records. Returns the number stored."""
        pass

    @abstractmethod
    async def delete_record(self, user_id: str, record_id: str) -> bool:
        """Remove a record. Returns False if it did not exist."""
        pass
