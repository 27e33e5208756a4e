"""
Decay Engine - Periodic Memory Erosion

Batch sweep over every user's memory records:
- Selects records below the mastered threshold not reviewed within the grace period
- Applies fractional daily decay (algos.mem_scoring.decay)
- Appends a system_decay history entry with true before/after levels
- Bumps each affected user's DailyStat.words_decayed once per run

Per-record failures are logged and skipped; the sweep never aborts.
"""

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional

from wordmaster.algos.mem_scoring.decay import compute_days_since_review, compute_decayed_level
from wordmaster.algos.mem_scoring.recency import ensure_utc
from wordmaster.domain.exceptions import EntityNotFoundError, StorageError
from wordmaster.models.database.review_history import ReviewActionType, ReviewHistoryCreate
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.dto.decay import DecayRunResult
from wordmaster.services.memory.config import MemoryEngineConfig
from wordmaster.services.stores.base import DailyStatStore, MemoryRecordStore, ReviewHistoryLog

logger = logging.getLogger(__name__)


class DecayEngine:
    """
    Applies time-based decay to unreviewed memory records.

    Usage:
        stores = build_sql_stores(session)
        engine = DecayEngine(stores.records, stores.history, stores.daily_stats)
        result = engine.run()
    """

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

    def run(self, now: Optional[datetime] = None) -> DecayRunResult:
        """
        Execute one decay sweep.

        Args:
            now: Reference time (default: current UTC time)

        Returns:
            DecayRunResult with counts, total decay and failed record IDs
        """
        now = ensure_utc(now) if now else datetime.now(timezone.utc)
        reviewed_before = now - timedelta(days=self.config.grace_period_days)

        candidates = self.records.list_decay_candidates(self.config.mastered_threshold, reviewed_before)
        logger.info(f"Decay run started: {len(candidates)} candidate records (reference {now.isoformat()})")

        result = DecayRunResult(message="")
        decayed_per_user: Counter = Counter()
        total_decay = 0.0

        for user_word in candidates:
            try:
                decay_amount = self._decay_record(user_word, now)
            except (StorageError, EntityNotFoundError) as e:
                logger.error(f"Decay failed for user_word {user_word.id}: {e}", exc_info=True)
                result.failed_count += 1
                result.failed_ids.append(user_word.id)
                continue

            if decay_amount is None:
                continue

            decayed_per_user[user_word.user_id] += 1
            total_decay += decay_amount

        stat_date = now.date()
        for user_id, count in decayed_per_user.items():
            try:
                self.daily_stats.increment(user_id, stat_date, words_decayed=count)
            except StorageError as e:
                # Record changes already landed; the counter is best effort
                logger.error(f"Failed to record decay stats for user {user_id}: {e}", exc_info=True)

        result.decayed_count = sum(decayed_per_user.values())
        result.total_decay_amount = round(total_decay, 1)

        if result.decayed_count:
            result.message = (
                f"Applied memory decay to {result.decayed_count} words "
                f"(total decay {result.total_decay_amount})"
            )
        else:
            result.message = "No words needed memory decay"
        if result.failed_count:
            result.message += f"; {result.failed_count} records failed"

        logger.info(
            f"Decay run complete: {result.decayed_count} decayed across {len(decayed_per_user)} users, "
            f"total {result.total_decay_amount}, {result.failed_count} failed"
        )
        return result

    def _decay_record(self, user_word: UserWord, now: datetime) -> Optional[float]:
        """Decay one record. Returns the amount removed, or None when nothing changed."""
        if user_word.last_decayed_at is not None and ensure_utc(user_word.last_decayed_at).date() == now.date():
            return None

        days_since_review = compute_days_since_review(user_word.last_reviewed_at, now)
        if days_since_review < self.config.grace_period_days:
            return None

        memory_before = user_word.memory_level
        new_level = compute_decayed_level(
            memory_before,
            days_since_review,
            grace_period_days=self.config.grace_period_days,
            decay_rate_per_day=self.config.decay_rate_per_day,
        )
        if new_level == memory_before:
            return None

        with self.records.transaction():
            self.records.apply_decay(user_word.id, new_level, now)
            self.history.append(
                ReviewHistoryCreate(
                    user_id=user_word.user_id,
                    word_id=user_word.word_id,
                    user_word_id=user_word.id,
                    action_type=ReviewActionType.SYSTEM_DECAY,
                    memory_before=memory_before,
                    memory_after=new_level,
                    memory_change=new_level - memory_before,
                ),
                created_at=now,
            )

        logger.debug(f"Decayed user_word {user_word.id}: {memory_before} → {new_level} ({days_since_review}d)")
        return memory_before - new_level
