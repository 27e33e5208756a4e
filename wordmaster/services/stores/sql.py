"""
SQL store implementations.

Each write runs inside its own SAVEPOINT so a failed row can be rolled back
without discarding the rest of the caller's transaction. SQLAlchemy errors
surface as StorageError.
"""

from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from wordmaster.domain.daily_stat_operations import DailyStatOperations
from wordmaster.domain.exceptions import EntityNotFoundError, StorageError
from wordmaster.domain.review_history_operations import ReviewHistoryOperations
from wordmaster.domain.user_word_operations import UserWordOperations
from wordmaster.models.database.daily_stats import DailyStat
from wordmaster.models.database.review_history import ReviewHistory, ReviewHistoryCreate
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.database.words import Word
from wordmaster.services.stores.base import DailyStatStore, MemoryRecordStore, ReviewHistoryLog


class SQLMemoryRecordStore(MemoryRecordStore):

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self.session.begin_nested():
            yield

    def get(self, user_word_id: UUID) -> Optional[UserWord]:
        try:
            return UserWordOperations.get_by_id(self.session, user_word_id)
        except SQLAlchemyError as e:
            raise StorageError("get_user_word", str(e)) from e

    def list_decay_candidates(self, mastered_threshold: float, reviewed_before: datetime) -> List[UserWord]:
        try:
            return UserWordOperations.list_decay_candidates(self.session, mastered_threshold, reviewed_before)
        except SQLAlchemyError as e:
            raise StorageError("list_decay_candidates", str(e)) from e

    def _require(self, user_word_id: UUID) -> UserWord:
        user_word = self.get(user_word_id)
        if user_word is None:
            raise EntityNotFoundError("UserWord", user_word_id)
        return user_word

    def apply_decay(self, user_word_id: UUID, new_level: float, decayed_at: datetime) -> UserWord:
        try:
            with self.session.begin_nested():
                user_word = self._require(user_word_id)
                user_word.memory_level = new_level
                user_word.last_memory_update_at = decayed_at
                user_word.last_decayed_at = decayed_at
                self.session.add(user_word)
            return user_word
        except SQLAlchemyError as e:
            raise StorageError("apply_decay", str(e)) from e

    def apply_known_review(
        self,
        user_word_id: UUID,
        new_level: float,
        reviewed_at: datetime,
        is_quick_learner: bool
    ) -> UserWord:
        try:
            with self.session.begin_nested():
                user_word = self._require(user_word_id)
                user_word.memory_level = new_level
                user_word.last_reviewed_at = reviewed_at
                user_word.last_memory_update_at = reviewed_at
                user_word.times_reviewed += 1
                user_word.times_marked_known += 1
                user_word.is_quick_learner = is_quick_learner
                self.session.add(user_word)
            return user_word
        except SQLAlchemyError as e:
            raise StorageError("apply_known_review", str(e)) from e

    def apply_review_request(self, user_word_id: UUID) -> UserWord:
        try:
            with self.session.begin_nested():
                user_word = self._require(user_word_id)
                user_word.times_reviewed += 1
                user_word.times_marked_review += 1
                self.session.add(user_word)
            return user_word
        except SQLAlchemyError as e:
            raise StorageError("apply_review_request", str(e)) from e

    def set_memory_level(self, user_id: UUID, user_word_id: UUID, memory_level: float, updated_at: datetime) -> UserWord:
        try:
            with self.session.begin_nested():
                return UserWordOperations.set_memory_level(
                    self.session, user_id, user_word_id, memory_level, updated_at
                )
        except SQLAlchemyError as e:
            raise StorageError("set_memory_level", str(e)) from e

    def list_feed_rows(self, user_id: UUID) -> List[Tuple[UserWord, Word]]:
        try:
            return UserWordOperations.list_with_words(self.session, user_id)
        except SQLAlchemyError as e:
            raise StorageError("list_feed_rows", str(e)) from e


class SQLReviewHistoryLog(ReviewHistoryLog):

    def __init__(self, session: Session):
        self.session = session

    def append(self, entry: ReviewHistoryCreate, created_at: Optional[datetime] = None) -> ReviewHistory:
        try:
            with self.session.begin_nested():
                return ReviewHistoryOperations.create(self.session, entry, created_at)
        except SQLAlchemyError as e:
            raise StorageError("append_review_history", str(e)) from e

    def list_recent(self, user_id: UUID, word_id: UUID, since: datetime) -> List[ReviewHistory]:
        try:
            return ReviewHistoryOperations.get_recent_for_word(self.session, user_id, word_id, since)
        except SQLAlchemyError as e:
            raise StorageError("list_recent_reviews", str(e)) from e


class SQLDailyStatStore(DailyStatStore):

    def __init__(self, session: Session):
        self.session = session

    def increment(self, user_id: UUID, stat_date: date, **counters: int) -> DailyStat:
        try:
            with self.session.begin_nested():
                return DailyStatOperations.increment(self.session, user_id, stat_date, **counters)
        except SQLAlchemyError as e:
            raise StorageError("increment_daily_stat", str(e)) from e
