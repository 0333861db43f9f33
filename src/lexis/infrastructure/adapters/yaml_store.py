"""
YAML Review Repository — Infrastructure adapter for a single YAML file.

Layout:

    version: 1
    users:
      local:
        - id: rev_01J...
          term: ephemeral
          definition: lasting a very short time
          next_review_date: 2026-10-19
          ...

The whole file is loaded on first access and rewritten after every change.
"""

import logging
import os
import tempfile
from dataclasses import asdict, fields
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from lexis.domain.review.models import VocabularyReviewRecord

from .memory_store import InMemoryReviewRepository

logger = logging.getLogger(__name__)

STORE_VERSION = 1
_RECORD_FIELDS = {f.name for f in fields(VocabularyReviewRecord)}
_DATE_FIELDS = ("next_review_date", "created_at", "last_review_date")


def parse_date(value: Any) -> date | None:
    """Coerce a stored date, datetime or ISO string to a calendar date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def record_to_dict(record: VocabularyReviewRecord) -> dict[str, Any]:
    """Serialize a record, dropping empty optional metadata."""
    data = asdict(record)
    return {k: v for k, v in data.items() if v is not None or k == "last_review_date"}


def record_from_dict(data: dict[str, Any]) -> VocabularyReviewRecord:
    """
    Build a record from a stored mapping.

    Unknown keys are ignored so older or hand-edited files still load.
    """
    values = {k: v for k, v in data.items() if k in _RECORD_FIELDS}
    for key in _DATE_FIELDS:
        if key in values:
            values[key] = parse_date(values[key])
    if "ease_factor" in values:
        values["ease_factor"] = float(values["ease_factor"])
    return VocabularyReviewRecord(**values)


class YamlReviewRepository(InMemoryReviewRepository):
    """Persists records to a YAML file, writing atomically via a temp file."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    def _load(self) -> None:
        if self._loaded:
            return

        if not self.path.exists():
            logger.debug(f"Store {self.path} does not exist yet")
            self._loaded = True
            return

        with self.path.open(encoding="utf-8") as fh:
            doc = yaml.safe_load(fh) or {}
        if not isinstance(doc, dict):
            raise ValueError(f"{self.path} is not a lexis review store")

        # Parse every row before installing any; a failed load stays unloaded.
        parsed = [
            (str(user_id), record_from_dict(row))
            for user_id, rows in (doc.get("users") or {}).items()
            for row in rows or []
        ]
        self._users = {}
        for user_id, record in parsed:
            self._upsert(user_id, record)
        self._loaded = True
        logger.debug(f"Loaded {len(parsed)} records from {self.path}")

    def _flush(self) -> None:
        doc = {
            "version": STORE_VERSION,
            "users": {
                user_id: [record_to_dict(r) for r in bucket.values()]
                for user_id, bucket in self._users.items()
                if bucket
            },
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                yaml.safe_dump(doc, fh, sort_keys=False, allow_unicode=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def list_records(self, user_id: str) -> list[VocabularyReviewRecord]:
        self._load()
        return await super().list_records(user_id)

    async def get_record(self, user_id: str, record_id: str) -> VocabularyReviewRecord | None:
        self._load()
        return await super().get_record(user_id, record_id)

    async def find_by_term(
        self, user_id: str, term: str, source_type: str
    ) -> VocabularyReviewRecord | None:
        self._load()
        return await super().find_by_term(user_id, term, source_type)

    async def save_record(
        self, user_id: str, record: VocabularyReviewRecord
    ) -> VocabularyReviewRecord:
        self._load()
        stored = await super().save_record(user_id, record)
        self._flush()
        return stored

    async def add_records(self, user_id: str, records: list[VocabularyReviewRecord]) -> int:
        self._load()
        count = await super().add_records(user_id, records)
        self._flush()
        return count

    async def delete_record(self, user_id: str, record_id: str) -> bool:
        self._load()
        deleted = await super().delete_record(user_id, record_id)
        if deleted:
            self._flush()
        return deleted
