"""
Review Update Engine - Request-Time Memory Strengthening

Handles the three user review actions:
- known:  raises memory level (base + optional quick-learner bonus)
- review: records a "show again" action, level unchanged
- skip:   records the skip only

Each action's writes (record, history entry, daily stats) land together
or not at all. Concurrent reviews of the same record are last-write-wins.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence
from uuid import UUID

from wordmaster.algos.mem_scoring.recency import ensure_utc
from wordmaster.algos.mem_scoring.review import compute_memory_increase
from wordmaster.domain.exceptions import DomainError, DomainValidationError, EntityNotFoundError
from wordmaster.models.database.review_history import ReviewActionType, ReviewHistory, ReviewHistoryCreate
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.dto.reviews import (
    BatchReviewFailure,
    BatchReviewResult,
    ReviewAction,
    ReviewRequest,
    ReviewResult,
)
from wordmaster.services.memory.config import MemoryEngineConfig
from wordmaster.services.stores.base import DailyStatStore, MemoryRecordStore, ReviewHistoryLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PendingReview:
    """The action being recorded, counted by the quick-learner detector."""
    action_type: ReviewActionType


class ReviewEngine:
    """Applies review actions to memory records."""

    def __init__(
        self,
        records: MemoryRecordStore,
        history: ReviewHistoryLog,
        daily_stats: DailyStatStore,
        config: Optional[MemoryEngineConfig] = None,
    ):
        self.records = records
        self.history = history
        self.daily_stats = daily_stats
        self.config = config or MemoryEngineConfig.from_settings()

    # ─────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────

    def apply(self, user_id: UUID, request: ReviewRequest, now: Optional[datetime] = None) -> ReviewResult:
        """Apply one review action, dispatching on request.action_type."""
        if request.action_type == ReviewAction.KNOWN:
            return self.mark_known(user_id, request, now)
        if request.action_type == ReviewAction.REVIEW:
            return self.mark_for_review(user_id, request, now)
        if request.action_type == ReviewAction.SKIP:
            return self.skip(user_id, request, now)
        raise DomainValidationError(f"Unknown review action: {request.action_type}")

    def apply_batch(
        self,
        user_id: UUID,
        requests: Sequence[ReviewRequest],
        now: Optional[datetime] = None
    ) -> BatchReviewResult:
        """
        Apply each review independently. A failed item is logged and reported
        in `failures`; it does not affect the other items.
        """
        batch = BatchReviewResult()

        for request in requests:
            try:
                batch.results.append(self.apply(user_id, request, now))
            except DomainError as e:
                logger.warning(f"Batch review failed for user_word {request.user_word_id}: {e}")
                batch.failures.append(BatchReviewFailure(user_word_id=request.user_word_id, error=str(e)))

        logger.info(
            f"Batch review for user {user_id}: {batch.succeeded_count} applied, {batch.failed_count} failed"
        )
        return batch

    # ─────────────────────────────────────────────────────────────
    # Actions
    # ─────────────────────────────────────────────────────────────

    def mark_known(self, user_id: UUID, request: ReviewRequest, now: Optional[datetime] = None) -> ReviewResult:
        """
        Strengthen memory for a word the user recalled.

        1. Load and validate the record
        2. Fetch this word's history inside the quick-learner window
        3. Score base + bonus with the pending action counted
        4. Persist record, history entry and daily stats together
        """
        now = self._resolve_now(now)
        user_word = self._load_record(user_id, request)
        memory_before = self._current_level(user_word, request)

        since = now - timedelta(hours=self.config.quick_learner_window_hours)
        recent = self.recent_reviews(user_id, request.word_id, since)

        increase = compute_memory_increase(
            current_memory_level=memory_before,
            recent_reviews=[*recent, _PendingReview(request.action_type.history_type)],
            is_quick_learner=user_word.is_quick_learner,
            quick_learning_enabled=request.quick_learning_enabled,
            base_increase=self.config.review_base_increase,
            quick_learner_threshold=self.config.quick_learner_threshold,
        )
        new_level = increase.new_memory_level

        with self.records.transaction():
            self.records.apply_known_review(user_word.id, new_level, now, increase.is_quick_learner)
            self._append_history(user_id, request, memory_before, new_level, now)
            self.daily_stats.increment(user_id, now.date(), words_reviewed=1, words_marked_known=1)

        logger.debug(
            f"Known review for user_word {user_word.id}: {memory_before} → {new_level} "
            f"(+{increase.total_increase}, {increase.reason})"
        )

        return ReviewResult(
            user_word_id=user_word.id,
            action_type=ReviewAction.KNOWN,
            memory_before=memory_before,
            new_memory_level=new_level,
            memory_change=new_level - memory_before,
            bonus_applied=increase.bonus_increase,
            is_quick_learner=increase.is_quick_learner,
            reason=increase.reason,
        )

    def mark_for_review(self, user_id: UUID, request: ReviewRequest, now: Optional[datetime] = None) -> ReviewResult:
        """Record a "show me again" action. Level and last_reviewed_at stay as they are."""
        now = self._resolve_now(now)
        user_word = self._load_record(user_id, request)
        level = self._current_level(user_word, request)

        with self.records.transaction():
            self.records.apply_review_request(user_word.id)
            self._append_history(user_id, request, level, level, now)
            self.daily_stats.increment(user_id, now.date(), words_reviewed=1, words_marked_review=1)

        return ReviewResult(
            user_word_id=user_word.id,
            action_type=ReviewAction.REVIEW,
            memory_before=level,
            new_memory_level=level,
            memory_change=0.0,
            is_quick_learner=user_word.is_quick_learner,
            reason="marked_for_review",
        )

    def skip(self, user_id: UUID, request: ReviewRequest, now: Optional[datetime] = None) -> ReviewResult:
        """Record a skip. Only the history log changes."""
        now = self._resolve_now(now)
        user_word = self._load_record(user_id, request)
        level = self._current_level(user_word, request)

        self._append_history(user_id, request, level, level, now)

        return ReviewResult(
            user_word_id=user_word.id,
            action_type=ReviewAction.SKIP,
            memory_before=level,
            new_memory_level=level,
            memory_change=0.0,
            is_quick_learner=user_word.is_quick_learner,
            reason="skipped",
        )

    def recent_reviews(self, user_id: UUID, word_id: UUID, since: datetime) -> list[ReviewHistory]:
        """History for (user, word) after `since`, newest first."""
        return self.history.list_recent(user_id, word_id, since)

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def _resolve_now(now: Optional[datetime]) -> datetime:
        return ensure_utc(now) if now else datetime.now(timezone.utc)

    def _load_record(self, user_id: UUID, request: ReviewRequest) -> UserWord:
        user_word = self.records.get(request.user_word_id)
        if user_word is None or user_word.user_id != user_id or user_word.word_id != request.word_id:
            raise EntityNotFoundError("UserWord", request.user_word_id)
        return user_word

    @staticmethod
    def _current_level(user_word: UserWord, request: ReviewRequest) -> float:
        level = request.current_memory_level
        if level is None:
            level = user_word.memory_level
        if not 0 <= level <= 100:
            raise DomainValidationError(f"Memory level must be between 0 and 100, got {level}")
        return level

    def _append_history(
        self,
        user_id: UUID,
        request: ReviewRequest,
        memory_before: float,
        memory_after: float,
        now: datetime,
    ) -> ReviewHistory:
        return self.history.append(
            ReviewHistoryCreate(
                user_id=user_id,
                word_id=request.word_id,
                user_word_id=request.user_word_id,
                action_type=request.action_type.history_type,
                memory_before=memory_before,
                memory_after=memory_after,
                memory_change=memory_after - memory_before,
                session_id=request.session_id,
            ),
            created_at=now,
        )
