"""UserWord model - per-(user, word) memory record tracked by the memory engine."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from wordmaster.models.database.mixins.timestamp import TimestampMixin


class UserWordBase(SQLModel):
    """Shared fields for UserWord model."""
    user_id: UUID = Field(index=True, description="Owner user ID (opaque to the engine)")
    word_id: UUID = Field(foreign_key="words.id", index=True, description="Catalog word ID")
    memory_level: float = Field(default=0.0, ge=0.0, le=100.0, index=True, description="Recall strength (0-100)")


class UserWord(UserWordBase, TimestampMixin, table=True):
    """
    Memory record. created_at doubles as the vocabulary addition time.

    Mutated only by the decay engine (level decreases) and the review
    engine (level increases or stays). Never deleted by the engine.
    """
    __tablename__ = "user_words"
    __table_args__ = (UniqueConstraint("user_id", "word_id", name="uq_user_words_user_word"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    last_reviewed_at: datetime | None = Field(default=None, nullable=True, index=True, description="Null = never reviewed")
    last_memory_update_at: datetime | None = Field(default=None, nullable=True, description="Last level change (decay or review)")
    last_decayed_at: datetime | None = Field(default=None, nullable=True, description="Last decay applied (same-day idempotence)")
    times_reviewed: int = Field(default=0, ge=0)
    times_marked_known: int = Field(default=0, ge=0)
    times_marked_review: int = Field(default=0, ge=0)
    is_quick_learner: bool = Field(default=False, description="Forward-looking quick-learner flag from the last known review")
    is_archived: bool = Field(default=False, description="Hidden from the feed")


class UserWordRead(UserWordBase):
    """Data returned when reading a UserWord."""
    id: UUID
    last_reviewed_at: datetime | None
    last_memory_update_at: datetime | None
    times_reviewed: int
    times_marked_known: int
    times_marked_review: int
    is_quick_learner: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime


class MemoryLevelUpdate(SQLModel):
    """Manual memory level override (100 is the authoritative cap)."""
    memory_level: float = Field(ge=0.0, le=100.0)
