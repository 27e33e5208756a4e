"""
Feed Ranking Engine - Review Queue Ordering

Builds a user's paginated word feed:
1. Load non-archived memory records joined with catalog words
2. Score priority (algos.mem_scoring.priority)
3. Apply filters (memory bucket, difficulty, part of speech)
4. Sort, compute breakdowns over the filtered set, paginate

Read-only: never writes to any store.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional
from uuid import UUID

from pydantic import ValidationError

from wordmaster.algos.mem_scoring.classification import classify_memory_level, memory_bucket
from wordmaster.algos.mem_scoring.priority import compute_priority_score
from wordmaster.algos.mem_scoring.recency import ensure_utc
from wordmaster.domain.exceptions import DomainValidationError
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.database.words import Word
from wordmaster.models.dto.feed import (
    DifficultyBreakdown,
    FeedQuery,
    FeedResponse,
    FeedSort,
    FeedStats,
    FeedWord,
    MemoryBreakdown,
    MemoryLevelFilter,
)
from wordmaster.services.memory.config import MemoryEngineConfig
from wordmaster.services.stores.base import MemoryRecordStore

logger = logging.getLogger(__name__)


# (key, reverse) per sort option. Python's sort is stable, so ties keep load order.
_SORT_KEYS: Dict[FeedSort, tuple[Callable[[FeedWord], object], bool]] = {
    FeedSort.PRIORITY: (lambda w: w.priority_score, True),
    FeedSort.MEMORY: (lambda w: w.memory_level, False),
    FeedSort.LENGTH: (lambda w: w.word_length, False),
    FeedSort.DATE: (lambda w: ensure_utc(w.added_at), True),
    FeedSort.ALPHABETICAL: (lambda w: w.word_text.casefold(), False),
}


def build_feed_query(**params) -> FeedQuery:
    """
    Build a FeedQuery from raw request parameters.

    None values fall back to defaults. Unknown filter or sort values raise
    DomainValidationError.
    """
    try:
        return FeedQuery(**{k: v for k, v in params.items() if v is not None})
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise DomainValidationError(f"Invalid feed parameters: {fields}") from e


class FeedEngine:
    """Ranks and paginates a user's vocabulary for review."""

    def __init__(self, records: MemoryRecordStore, config: Optional[MemoryEngineConfig] = None):
        self.records = records
        self.config = config or MemoryEngineConfig.from_settings()

    def get_feed(self, user_id: UUID, query: FeedQuery, now: Optional[datetime] = None) -> FeedResponse:
        """
        Build one feed page.

        Args:
            user_id: Feed owner
            query: Filters, sort and pagination (limit/offset are clamped)
            now: Reference time for priority scoring (default: current UTC time)

        Returns:
            FeedResponse (empty but well-formed when the user has no words)
        """
        now = ensure_utc(now) if now else datetime.now(timezone.utc)
        limit = max(1, min(query.limit, self.config.feed_max_limit))
        offset = max(0, query.offset)

        rows = self.records.list_feed_rows(user_id)
        words = [self._to_feed_word(user_word, word, now) for user_word, word in rows]
        words = [w for w in words if self._matches(w, query)]

        key, reverse = _SORT_KEYS[query.sort_by]
        words.sort(key=key, reverse=reverse)

        total_count = len(words)
        page = words[offset:offset + limit]
        has_more = offset + limit < total_count

        logger.debug(
            f"Feed for user {user_id}: {total_count} matching, returning {len(page)} "
            f"(offset {offset}, sort {query.sort_by.value})"
        )

        return FeedResponse(
            words=page,
            total_count=total_count,
            has_more=has_more,
            next_offset=offset + limit if has_more else None,
            stats=self._compute_stats(words),
        )

    @staticmethod
    def _to_feed_word(user_word: UserWord, word: Word, now: datetime) -> FeedWord:
        return FeedWord(
            user_word_id=user_word.id,
            word_id=word.id,
            word_text=word.word_text,
            word_length=word.word_length,
            difficulty_level=word.difficulty_level,
            part_of_speech=word.part_of_speech,
            definition=word.definition,
            phonetic=word.phonetic,
            memory_level=user_word.memory_level,
            memory_classification=classify_memory_level(user_word.memory_level),
            last_reviewed_at=user_word.last_reviewed_at,
            times_reviewed=user_word.times_reviewed,
            is_quick_learner=user_word.is_quick_learner,
            added_at=user_word.created_at,
            priority_score=compute_priority_score(user_word.last_reviewed_at, user_word.memory_level, now),
        )

    @staticmethod
    def _matches(word: FeedWord, query: FeedQuery) -> bool:
        if query.memory_level and query.memory_level != MemoryLevelFilter.ALL:
            if memory_bucket(word.memory_level) != query.memory_level.value:
                return False
        if query.difficulty and word.difficulty_level != query.difficulty:
            return False
        if query.part_of_speech and word.part_of_speech != query.part_of_speech:
            return False
        return True

    @staticmethod
    def _compute_stats(words: List[FeedWord]) -> FeedStats:
        buckets = Counter(memory_bucket(w.memory_level) for w in words)
        difficulties = Counter(w.difficulty_level.value for w in words)
        return FeedStats(
            memory_breakdown=MemoryBreakdown(**buckets),
            difficulty_breakdown=DifficultyBreakdown(**difficulties),
        )
