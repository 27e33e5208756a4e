"""
Tests for the DecayEngine sweep.

Runs against SQL stores on in-memory SQLite; failure isolation uses a
store wrapper that rejects selected records.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select

from wordmaster.domain.daily_stat_operations import DailyStatOperations
from wordmaster.domain.exceptions import StorageError
from wordmaster.models.database.review_history import ReviewActionType, ReviewHistory
from wordmaster.services.memory.decay_engine import DecayEngine
from wordmaster.services.stores.sql import SQLMemoryRecordStore


@pytest.fixture
def decay_engine(stores, config):
    return DecayEngine(stores.records, stores.history, stores.daily_stats, config)


def history_for(db_session, user_word_id):
    return list(
        db_session.execute(
            select(ReviewHistory).where(ReviewHistory.user_word_id == user_word_id)
        ).scalars()
    )


class TestDecayEngine:

    def test_decays_stale_word(self, decay_engine, user_word_factory, user_id, now, days_ago, db_session):
        """Level 50 reviewed 10 days ago → 27.5 with a system_decay entry."""
        record = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(10))

        result = decay_engine.run(now)

        assert result.decayed_count == 1
        assert result.total_decay_amount == 22.5
        assert result.failed_count == 0
        assert record.memory_level == 27.5
        assert record.last_memory_update_at == now
        assert record.last_decayed_at == now

        entries = history_for(db_session, record.id)
        assert len(entries) == 1
        entry = entries[0]
        assert entry.action_type == ReviewActionType.SYSTEM_DECAY
        assert entry.memory_before == 50.0
        assert entry.memory_after == 27.5
        assert entry.memory_after - entry.memory_before == entry.memory_change

    def test_last_reviewed_at_untouched(self, decay_engine, user_word_factory, user_id, now, days_ago):
        reviewed_at = days_ago(10)
        record = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=reviewed_at)

        decay_engine.run(now)

        assert record.last_reviewed_at == reviewed_at

    def test_mastered_words_exempt(self, decay_engine, user_word_factory, user_id, now, days_ago, db_session):
        mastered = user_word_factory(user_id, memory_level=80.0, last_reviewed_at=days_ago(30))

        result = decay_engine.run(now)

        assert result.decayed_count == 0
        assert mastered.memory_level == 80.0
        assert history_for(db_session, mastered.id) == []

    def test_grace_period_respected(self, decay_engine, user_word_factory, user_id, now, days_ago):
        fresh = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(0.5))
        edge = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(1.5))

        result = decay_engine.run(now)

        # One whole day since review equals the grace period: zero decay days
        assert result.decayed_count == 0
        assert fresh.memory_level == 50.0
        assert edge.memory_level == 50.0

    def test_never_reviewed_words_do_not_decay(self, decay_engine, user_word_factory, user_id, now):
        record = user_word_factory(user_id, memory_level=40.0, last_reviewed_at=None)

        result = decay_engine.run(now)

        assert result.decayed_count == 0
        assert record.memory_level == 40.0

    def test_no_candidates_gives_well_formed_result(self, decay_engine, now):
        result = decay_engine.run(now)

        assert result.decayed_count == 0
        assert result.total_decay_amount == 0.0
        assert result.failed_count == 0
        assert result.failed_ids == []
        assert result.message == "No words needed memory decay"

    def test_second_run_same_day_is_noop(self, decay_engine, user_word_factory, user_id, now, days_ago, db_session):
        record = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(10))

        first = decay_engine.run(now)
        second = decay_engine.run(now + timedelta(hours=3))

        assert first.decayed_count == 1
        assert second.decayed_count == 0
        assert record.memory_level == 27.5
        assert len(history_for(db_session, record.id)) == 1

    def test_next_day_decays_again(self, decay_engine, user_word_factory, user_id, now, days_ago):
        record = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(10))

        decay_engine.run(now)
        decay_engine.run(now + timedelta(days=1))

        # 11 days since review: 10 decay days → 50% of 27.5
        assert record.memory_level == pytest.approx(13.8)

    def test_monotonic_over_many_runs(self, decay_engine, user_word_factory, user_id, now, days_ago):
        record = user_word_factory(user_id, memory_level=70.0, last_reviewed_at=days_ago(2))
        levels = [record.memory_level]

        for day in range(30):
            decay_engine.run(now + timedelta(days=day))
            levels.append(record.memory_level)

        assert all(later <= earlier for earlier, later in zip(levels, levels[1:]))
        assert all(0.0 <= level <= 100.0 for level in levels)
        assert levels[-1] == 0.0

    def test_daily_stats_incremented_once_per_user(
        self, decay_engine, user_word_factory, now, days_ago, db_session
    ):
        alice, bob = uuid4(), uuid4()
        for _ in range(3):
            user_word_factory(alice, memory_level=50.0, last_reviewed_at=days_ago(5))
        user_word_factory(bob, memory_level=30.0, last_reviewed_at=days_ago(5))

        result = decay_engine.run(now)

        assert result.decayed_count == 4
        assert DailyStatOperations.get_for_date(db_session, alice, now.date()).words_decayed == 3
        assert DailyStatOperations.get_for_date(db_session, bob, now.date()).words_decayed == 1

    def test_zero_level_word_is_skipped(self, decay_engine, user_word_factory, user_id, now, days_ago):
        user_word_factory(user_id, memory_level=0.0, last_reviewed_at=days_ago(10))

        result = decay_engine.run(now)

        assert result.decayed_count == 0


class _FlakyRecordStore(SQLMemoryRecordStore):
    """Rejects decay writes for selected records."""

    def __init__(self, session, failing_ids):
        super().__init__(session)
        self.failing_ids = set(failing_ids)

    def apply_decay(self, user_word_id, new_level, decayed_at):
        if user_word_id in self.failing_ids:
            raise StorageError("apply_decay", "simulated write failure")
        return super().apply_decay(user_word_id, new_level, decayed_at)


class TestDecayFailureIsolation:

    def test_failed_record_does_not_abort_batch(
        self, stores, config, db_session, user_word_factory, user_id, now, days_ago
    ):
        records = [
            user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(10))
            for _ in range(3)
        ]
        broken = records[1]
        engine = DecayEngine(
            _FlakyRecordStore(db_session, [broken.id]), stores.history, stores.daily_stats, config
        )

        result = engine.run(now)

        assert result.decayed_count == 2
        assert result.failed_count == 1
        assert result.failed_ids == [broken.id]
        assert "1 records failed" in result.message
        assert broken.memory_level == 50.0
        assert history_for(db_session, broken.id) == []
        assert records[0].memory_level == 27.5
        assert records[2].memory_level == 27.5
        assert DailyStatOperations.get_for_date(db_session, user_id, now.date()).words_decayed == 2
