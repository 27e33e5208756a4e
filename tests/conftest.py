"""
Pytest configuration and fixtures for testing.

Every test gets a fresh in-memory SQLite database (StaticPool keeps the
single connection alive for the whole test).
"""
import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from uuid import UUID, uuid4

from sqlmodel import Session, SQLModel
from sqlalchemy.pool import StaticPool

from wordmaster.algos.mem_scoring.classification import classify_difficulty
from wordmaster.core.database import build_engine
from wordmaster.models.database.review_history import ReviewActionType, ReviewHistory
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.database.words import PartOfSpeech, Word
from wordmaster.services.memory.config import MemoryEngineConfig
from wordmaster.services.stores import MemoryStores, build_sql_stores

# Import all models so create_all sees every table
import wordmaster.models.database  # noqa: F401


# Fixed reference time used across engine tests
NOW = datetime(2026, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(name="now")
def now_fixture() -> datetime:
    return NOW


@pytest.fixture(name="engine", scope="function")
def engine_fixture():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        SQLModel.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture(name="db_session", scope="function")
def db_session_fixture(engine):
    """Clean session per test. Rolled back and closed afterwards."""
    session = Session(engine, expire_on_commit=False, autoflush=False)
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(name="stores")
def stores_fixture(db_session) -> MemoryStores:
    return build_sql_stores(db_session)


@pytest.fixture(name="config")
def config_fixture() -> MemoryEngineConfig:
    """Engine defaults, independent of any env overrides."""
    return MemoryEngineConfig()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def word_factory(db_session) -> Callable[..., Word]:
    """Create catalog words. Difficulty follows word length unless given."""

    def _create(
        word_text: str = "serendipity",
        part_of_speech: Optional[PartOfSpeech] = PartOfSpeech.NOUN,
        **kwargs,
    ) -> Word:
        kwargs.setdefault("difficulty_level", classify_difficulty(len(word_text)))
        word = Word(
            word_text=word_text,
            word_length=len(word_text),
            part_of_speech=part_of_speech,
            definition=f"definition of {word_text}",
            **kwargs,
        )
        db_session.add(word)
        db_session.flush()
        return word

    return _create


@pytest.fixture
def user_word_factory(db_session, word_factory) -> Callable[..., UserWord]:
    """Add a word to a user's vocabulary with the given memory state."""

    def _create(
        user_id: UUID,
        word: Optional[Word] = None,
        memory_level: float = 0.0,
        last_reviewed_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> UserWord:
        word = word or word_factory(f"word{uuid4().hex[:6]}")
        user_word = UserWord(
            user_id=user_id,
            word_id=word.id,
            memory_level=memory_level,
            last_reviewed_at=last_reviewed_at,
            **kwargs,
        )
        if created_at is not None:
            user_word.created_at = created_at
        db_session.add(user_word)
        db_session.flush()
        return user_word

    return _create


@pytest.fixture
def history_factory(db_session) -> Callable[..., ReviewHistory]:
    """Insert a history entry for a memory record at a given time."""

    def _create(
        user_word: UserWord,
        action_type: ReviewActionType,
        created_at: datetime,
        memory_before: float = 0.0,
        memory_after: float = 0.0,
    ) -> ReviewHistory:
        entry = ReviewHistory(
            user_id=user_word.user_id,
            word_id=user_word.word_id,
            user_word_id=user_word.id,
            action_type=action_type,
            memory_before=memory_before,
            memory_after=memory_after,
            memory_change=memory_after - memory_before,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(entry)
        db_session.flush()
        return entry

    return _create


def days_ago(days: float, reference: datetime = NOW) -> datetime:
    return reference - timedelta(days=days)


@pytest.fixture(name="days_ago")
def days_ago_fixture() -> Callable[[float], datetime]:
    return days_ago
