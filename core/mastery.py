"""Per-word mastery tracking used to bias offline word selection."""

import logging
import time

from .config import MASTERY_INDEX_KEY, MASTERY_PREFIX
from .interfaces import Storage
from .models import MasteryRecord
from .utils import normalize_word

logger = logging.getLogger(__name__)


class MasteryStore:
    """Tracks correct/incorrect attempts per word.

    Every update rebuilds the record and writes it whole under
    ``mastery:<word>``, so the stored counts are never half-updated.
    Records are read from storage once and then served from memory;
    writes go through to storage before the in-memory copy changes.
    """

    def __init__(self, storage: Storage, clock=time.time):
        self.storage = storage
        self.clock = clock
        self._records: dict[str, MasteryRecord] | None = None
        self._index: list[str] = []

    def _key(self, word: str) -> str:
        return f"{MASTERY_PREFIX}{word}"

    def _load(self) -> dict[str, MasteryRecord]:
        if self._records is None:
            index = list(self.storage.get(MASTERY_INDEX_KEY) or [])
            records = {}
            for word in index:
                data = self.storage.get(self._key(word))
                if data:
                    records[word] = MasteryRecord.from_dict(data)
            self._index = index
            self._records = records
        return self._records

    def get_record(self, word: str) -> MasteryRecord | None:
        return self._load().get(normalize_word(word))

    def track_progress(self, word: str, was_correct: bool) -> None:
        """Record one attempt. Storage failures are logged, never raised."""
        key_word = normalize_word(word)
        if not key_word:
            return
        try:
            record = self.get_record(key_word) or MasteryRecord(key_word)
            updated = record.with_attempt(was_correct, self.clock())
            # Index first so a stored record is always reachable from it
            if key_word not in self._index:
                self.storage.set(MASTERY_INDEX_KEY, self._index + [key_word])
                self._index.append(key_word)
            self.storage.set(self._key(key_word), updated.to_dict())
            self._records[key_word] = updated
        except Exception as e:
            logger.error(f"Failed to track progress for '{key_word}': {e}")

    def get_mastery_score(self, word: str) -> float | None:
        record = self.get_record(word)
        return record.mastery_score if record else None

    def get_all_records(self) -> list[MasteryRecord]:
        return list(self._load().values())

    def get_weak_words(self, limit: int) -> list[str]:
        """Least-mastered words first; ties go to the most recently seen."""
        records = self.get_all_records()
        records.sort(key=lambda r: (r.mastery_score or 0.0, -r.last_seen))
        return [r.word for r in records[:max(limit, 0)]]
