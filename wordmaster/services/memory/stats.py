"""
Vocabulary statistics for the words endpoints.

Read-only aggregations over memory records and daily stats:
memory level distribution, decay eligibility, and recent activity.
"""

from datetime import date, datetime, timedelta
from typing import List
from uuid import UUID

from sqlmodel import Session

from wordmaster.algos.mem_scoring.classification import MEMORY_BANDS, memory_band
from wordmaster.core.config import settings
from wordmaster.domain.daily_stat_operations import DailyStatOperations
from wordmaster.domain.user_word_operations import UserWordOperations
from wordmaster.models.database.daily_stats import DailyStat
from wordmaster.models.dto.stats import (
    DailyActivity,
    DecayMetrics,
    MemoryBand,
    MemoryDecayStatsResponse,
    MemoryDecayStatusResponse,
    ReviewActivityResponse,
    ReviewActivityTotals,
    TodayActivity,
    WeeklyActivity,
)
from wordmaster.services.memory.config import MemoryEngineConfig

WEEK_DAYS = 7
REVIEW_HISTORY_DAYS = 30


def next_decay_run_text() -> str:
    return f"Daily at {settings.DECAY_CRON_HOUR:02d}:00 UTC"


def _to_activity(stat: DailyStat) -> DailyActivity:
    return DailyActivity(
        stat_date=stat.stat_date,
        reviewed=stat.words_reviewed,
        marked_known=stat.words_marked_known,
        marked_review=stat.words_marked_review,
        decayed=stat.words_decayed,
    )


def get_memory_decay_stats(
    session: Session,
    user_id: UUID,
    config: MemoryEngineConfig,
    now: datetime,
) -> MemoryDecayStatsResponse:
    """Distribution of the user's words over memory bands, plus decay eligibility."""
    levels = UserWordOperations.list_memory_levels(session, user_id)
    total = len(levels)

    counts = {key: 0 for key, _, _ in MEMORY_BANDS}
    for level in levels:
        counts[memory_band(level)] += 1

    distribution = {
        key: MemoryBand(
            count=counts[key],
            percentage=round(counts[key] * 100 / total) if total else 0,
            label=label,
        )
        for key, _, label in MEMORY_BANDS
    }

    eligible = UserWordOperations.count_decay_candidates(
        session,
        user_id,
        config.mastered_threshold,
        now - timedelta(days=config.grace_period_days),
    )

    return MemoryDecayStatsResponse(
        memory_level_distribution=distribution,
        decay_metrics=DecayMetrics(
            total_words=total,
            eligible_for_decay=eligible,
            mastered_words=sum(1 for level in levels if level >= config.mastered_threshold),
            decay_rate=(
                f"{config.decay_rate_per_day:.0%} per day after "
                f"{config.grace_period_days} day grace period"
            ),
            next_decay_run=next_decay_run_text(),
        ),
    )


def get_memory_decay_status(session: Session, user_id: UUID, today: date) -> MemoryDecayStatusResponse:
    """Today's counters and the last seven days of activity."""
    week = DailyStatOperations.list_since(session, user_id, today - timedelta(days=WEEK_DAYS - 1), ascending=False)
    today_stat = next((s for s in week if s.stat_date == today), None)

    total_reviewed = sum(s.words_reviewed for s in week)

    return MemoryDecayStatusResponse(
        today=TodayActivity(
            stat_date=today,
            words_reviewed=today_stat.words_reviewed if today_stat else 0,
            words_marked_known=today_stat.words_marked_known if today_stat else 0,
            words_decayed=today_stat.words_decayed if today_stat else 0,
            has_activity_today=today_stat is not None,
        ),
        last_seven_days=WeeklyActivity(
            total_words_reviewed=total_reviewed,
            avg_per_day=round(total_reviewed / WEEK_DAYS),
            history=[_to_activity(s) for s in week],
        ),
        next_scheduled_run=next_decay_run_text(),
    )


def get_review_activity(session: Session, user_id: UUID, today: date) -> ReviewActivityResponse:
    """Thirty days of daily stats for charting, oldest first."""
    stats: List[DailyStat] = DailyStatOperations.list_since(
        session, user_id, today - timedelta(days=REVIEW_HISTORY_DAYS - 1)
    )
    data = [_to_activity(s) for s in stats]

    return ReviewActivityResponse(
        data=data,
        totals=ReviewActivityTotals(
            total_reviewed=sum(d.reviewed for d in data),
            total_learned=sum(d.marked_known for d in data),
            total_marked_review=sum(d.marked_review for d in data),
            total_decayed=sum(d.decayed for d in data),
        ),
    )
