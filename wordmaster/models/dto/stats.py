"""DTOs for memory decay statistics and review activity."""

from datetime import date
from typing import Dict, List

from pydantic import BaseModel, Field


class MemoryBand(BaseModel):
    count: int = 0
    percentage: int = 0
    label: str


class DecayMetrics(BaseModel):
    total_words: int = 0
    eligible_for_decay: int = 0
    mastered_words: int = 0
    decay_rate: str
    next_decay_run: str


class MemoryDecayStatsResponse(BaseModel):
    memory_level_distribution: Dict[str, MemoryBand]
    decay_metrics: DecayMetrics


class DailyActivity(BaseModel):
    stat_date: date
    reviewed: int = 0
    marked_known: int = 0
    marked_review: int = 0
    decayed: int = 0


class TodayActivity(BaseModel):
    stat_date: date
    words_reviewed: int = 0
    words_marked_known: int = 0
    words_decayed: int = 0
    has_activity_today: bool = False


class WeeklyActivity(BaseModel):
    total_words_reviewed: int = 0
    avg_per_day: int = 0
    history: List[DailyActivity] = Field(default_factory=list)


class MemoryDecayStatusResponse(BaseModel):
    today: TodayActivity
    last_seven_days: WeeklyActivity
    next_scheduled_run: str


class ReviewActivityTotals(BaseModel):
    total_reviewed: int = 0
    total_learned: int = 0
    total_marked_review: int = 0
    total_decayed: int = 0


class ReviewActivityResponse(BaseModel):
    data: List[DailyActivity] = Field(default_factory=list)
    totals: ReviewActivityTotals = Field(default_factory=ReviewActivityTotals)
