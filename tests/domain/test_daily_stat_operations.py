"""Tests for DailyStatOperations."""

from datetime import date

import pytest

from wordmaster.domain.daily_stat_operations import DailyStatOperations
from wordmaster.domain.exceptions import DomainValidationError

DAY = date(2026, 3, 15)


def test_increment_creates_row(db_session, user_id):
    stat = DailyStatOperations.increment(db_session, user_id, DAY, words_decayed=5)

    assert stat.id is not None
    assert stat.words_decayed == 5
    assert stat.words_reviewed == 0


def test_increment_accumulates(db_session, user_id):
    DailyStatOperations.increment(db_session, user_id, DAY, words_reviewed=1, words_marked_known=1)
    DailyStatOperations.increment(db_session, user_id, DAY, words_reviewed=1, words_marked_review=1)

    stat = DailyStatOperations.get_for_date(db_session, user_id, DAY)
    assert stat.words_reviewed == 2
    assert stat.words_marked_known == 1
    assert stat.words_marked_review == 1


def test_rows_are_per_user_and_day(db_session, user_id):
    DailyStatOperations.increment(db_session, user_id, DAY, words_reviewed=1)
    DailyStatOperations.increment(db_session, user_id, date(2026, 3, 16), words_reviewed=1)

    assert len(DailyStatOperations.list_since(db_session, user_id, DAY)) == 2


def test_unknown_counter_rejected(db_session, user_id):
    with pytest.raises(DomainValidationError):
        DailyStatOperations.increment(db_session, user_id, DAY, words_forgotten=1)
