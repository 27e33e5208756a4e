"""DTOs for the vocabulary feed."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from wordmaster.models.database.words import DifficultyLevel, PartOfSpeech


class MemoryLevelFilter(str, Enum):
    """Memory bucket filter: learning <40, reviewing 40-69, well_known >=70."""
    ALL = "all"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    WELL_KNOWN = "well_known"


class FeedSort(str, Enum):
    PRIORITY = "priority"
    MEMORY = "memory"
    LENGTH = "length"
    DATE = "date"
    ALPHABETICAL = "alphabetical"


class FeedQuery(BaseModel):
    """
    Feed request parameters.

    limit/offset are clamped by the feed engine rather than rejected.
    """

    limit: int = Field(default=50, description="Page size (clamped to 1-100)")
    offset: int = Field(default=0, description="Pagination offset (clamped to >= 0)")
    memory_level: Optional[MemoryLevelFilter] = None
    difficulty: Optional[DifficultyLevel] = None
    part_of_speech: Optional[PartOfSpeech] = None
    sort_by: FeedSort = FeedSort.PRIORITY


class FeedWord(BaseModel):
    """Memory record joined with its catalog word, plus the computed priority."""

    user_word_id: UUID
    word_id: UUID
    word_text: str
    word_length: int
    difficulty_level: DifficultyLevel
    part_of_speech: Optional[PartOfSpeech] = None
    definition: str = ""
    phonetic: Optional[str] = None
    memory_level: float
    memory_classification: str
    last_reviewed_at: Optional[datetime] = None
    times_reviewed: int = 0
    is_quick_learner: bool = False
    added_at: datetime
    priority_score: float


class MemoryBreakdown(BaseModel):
    learning: int = 0
    reviewing: int = 0
    well_known: int = 0


class DifficultyBreakdown(BaseModel):
    easy: int = 0
    medium: int = 0
    hard: int = 0
    very_hard: int = 0


class FeedStats(BaseModel):
    """Breakdowns over the filtered set (not just the returned page)."""

    memory_breakdown: MemoryBreakdown = Field(default_factory=MemoryBreakdown)
    difficulty_breakdown: DifficultyBreakdown = Field(default_factory=DifficultyBreakdown)


class FeedResponse(BaseModel):
    words: List[FeedWord] = Field(default_factory=list)
    total_count: int = 0
    has_more: bool = False
    next_offset: Optional[int] = None
    stats: FeedStats = Field(default_factory=FeedStats)
