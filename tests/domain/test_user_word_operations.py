"""Tests for UserWordOperations queries and manual level overrides."""

from uuid import uuid4

import pytest

from wordmaster.domain.exceptions import DomainValidationError, EntityNotFoundError
from wordmaster.domain.user_word_operations import UserWordOperations


class TestSetMemoryLevel:

    def test_sets_level(self, db_session, user_word_factory, user_id, now):
        record = user_word_factory(user_id, memory_level=20.0)

        updated = UserWordOperations.set_memory_level(db_session, user_id, record.id, 100.0, now)

        assert updated.memory_level == 100.0
        assert updated.last_memory_update_at == now

    @pytest.mark.parametrize("level", [-0.1, 100.1, 101.0])
    def test_rejects_out_of_range(self, db_session, user_word_factory, user_id, now, level):
        record = user_word_factory(user_id, memory_level=20.0)

        with pytest.raises(DomainValidationError):
            UserWordOperations.set_memory_level(db_session, user_id, record.id, level, now)

    def test_other_user_cannot_update(self, db_session, user_word_factory, user_id, now):
        record = user_word_factory(user_id, memory_level=20.0)

        with pytest.raises(EntityNotFoundError):
            UserWordOperations.set_memory_level(db_session, uuid4(), record.id, 50.0, now)


class TestDecayCandidates:

    def test_filters_threshold_and_recency(self, db_session, user_word_factory, user_id, now, days_ago):
        stale = user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(3))
        never = user_word_factory(user_id, memory_level=10.0)
        user_word_factory(user_id, memory_level=80.0, last_reviewed_at=days_ago(3))
        user_word_factory(user_id, memory_level=50.0, last_reviewed_at=days_ago(0.2))

        candidates = UserWordOperations.list_decay_candidates(db_session, 80.0, days_ago(1))

        assert {c.id for c in candidates} == {stale.id, never.id}
        assert UserWordOperations.count_decay_candidates(db_session, user_id, 80.0, days_ago(1)) == 2

    def test_list_with_words_excludes_archived(self, db_session, user_word_factory, user_id):
        visible = user_word_factory(user_id)
        user_word_factory(user_id, is_archived=True)

        rows = UserWordOperations.list_with_words(db_session, user_id)

        assert [user_word.id for user_word, _ in rows] == [visible.id]
        assert rows[0][1].id == visible.word_id
