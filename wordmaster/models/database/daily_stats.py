"""DailyStat model - per-user, per-day review and decay counters."""

from datetime import date
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from wordmaster.models.database.mixins.timestamp import TimestampMixin


class DailyStatBase(SQLModel):
    """Shared fields for DailyStat model."""
    user_id: UUID = Field(index=True)
    stat_date: date = Field(index=True, description="UTC calendar day")
    words_reviewed: int = Field(default=0, ge=0)
    words_marked_known: int = Field(default=0, ge=0)
    words_marked_review: int = Field(default=0, ge=0)
    words_decayed: int = Field(default=0, ge=0)


class DailyStat(DailyStatBase, TimestampMixin, table=True):
    """Daily counters. One row per (user, stat_date), created on first increment."""
    __tablename__ = "daily_stats"
    __table_args__ = (UniqueConstraint("user_id", "stat_date", name="uq_daily_stats_user_date"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)


class DailyStatRead(DailyStatBase):
    """Data returned when reading a DailyStat."""
    id: UUID


# Counter columns that increment() accepts
DAILY_STAT_COUNTERS = frozenset({
    "words_reviewed",
    "words_marked_known",
    "words_marked_review",
    "words_decayed",
})
