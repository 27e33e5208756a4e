"""ReviewHistory model - append-only log of review actions and system decay."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from wordmaster.models.database.mixins.timestamp import TimestampMixin


class ReviewActionType(str, Enum):
    """Action recorded in review history."""
    MARKED_KNOWN = "marked_known"
    MARKED_REVIEW = "marked_review"
    SKIPPED = "skipped"
    SYSTEM_DECAY = "system_decay"


class ReviewHistoryBase(SQLModel):
    """Shared fields for ReviewHistory model."""
    user_id: UUID = Field(index=True)
    word_id: UUID = Field(index=True)
    user_word_id: UUID = Field(foreign_key="user_words.id", index=True)
    action_type: ReviewActionType = Field(index=True)
    memory_before: float = Field(ge=0.0, le=100.0)
    memory_after: float = Field(ge=0.0, le=100.0)
    memory_change: float = Field(description="memory_after - memory_before (negative for decay)")
    session_id: str | None = Field(default=None, nullable=True, max_length=64, description="Client review session")


class ReviewHistory(ReviewHistoryBase, TimestampMixin, table=True):
    """Immutable review history entry. created_at is the review time."""
    __tablename__ = "review_history"

    id: UUID = Field(default_factory=uuid4, primary_key=True)


class ReviewHistoryCreate(ReviewHistoryBase):
    """Data required to append a history entry."""
    pass


class ReviewHistoryRead(ReviewHistoryBase):
    """Data returned when reading a history entry."""
    id: UUID
    created_at: datetime
