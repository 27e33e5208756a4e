"""Abstract store interfaces injected into the memory engines."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional, Tuple
from uuid import UUID

from wordmaster.models.database.daily_stats import DailyStat
from wordmaster.models.database.review_history import ReviewHistory, ReviewHistoryCreate
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.database.words import Word


class MemoryRecordStore(ABC):
    """Per-(user, word) memory records."""

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Group several writes so they succeed or fail together. No-op by default."""
        yield

    @abstractmethod
    def get(self, user_word_id: UUID) -> Optional[UserWord]:
        """Return the record, or None if it does not exist."""
        pass

    @abstractmethod
    def list_decay_candidates(self, mastered_threshold: float, reviewed_before: datetime) -> List[UserWord]:
        """Records below mastered_threshold last reviewed before reviewed_before (or never)."""
        pass

    @abstractmethod
    def apply_decay(self, user_word_id: UUID, new_level: float, decayed_at: datetime) -> UserWord:
        """Write a decayed level. Does not touch last_reviewed_at."""
        pass

    @abstractmethod
    def apply_known_review(
        self,
        user_word_id: UUID,
        new_level: float,
        reviewed_at: datetime,
        is_quick_learner: bool
    ) -> UserWord:
        """Write a known review: level, review timestamps, counters and quick-learner flag."""
        pass

    @abstractmethod
    def apply_review_request(self, user_word_id: UUID) -> UserWord:
        """Count a "review again" action. Level and last_reviewed_at are unchanged."""
        pass

    @abstractmethod
    def set_memory_level(self, user_id: UUID, user_word_id: UUID, memory_level: float, updated_at: datetime) -> UserWord:
        pass

    @abstractmethod
    def list_feed_rows(self, user_id: UUID) -> List[Tuple[UserWord, Word]]:
        """Non-archived records joined with catalog words."""
        pass


class ReviewHistoryLog(ABC):
    """Append-only review history."""

    @abstractmethod
    def append(self, entry: ReviewHistoryCreate, created_at: Optional[datetime] = None) -> ReviewHistory:
        pass

    @abstractmethod
    def list_recent(self, user_id: UUID, word_id: UUID, since: datetime) -> List[ReviewHistory]:
        """Entries for (user, word) created after `since`, newest first."""
        pass


class DailyStatStore(ABC):
    """Per-user daily counters."""

    @abstractmethod
    def increment(self, user_id: UUID, stat_date: date, **counters: int) -> DailyStat:
        """Add to counters, creating the row when missing."""
        pass
