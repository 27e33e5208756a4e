"""
Words API Routes

Memory decay trigger, decay statistics, activity history and manual
memory level overrides for the authenticated user's vocabulary.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from wordmaster.api.deps import get_decay_engine, get_memory_config, get_stores
from wordmaster.core.auth import require_current_user_id, require_scheduler_or_user
from wordmaster.core.database import get_db
from wordmaster.models.database.user_words import MemoryLevelUpdate, UserWordRead
from wordmaster.models.dto.decay import DecayRunResult
from wordmaster.models.dto.stats import (
    MemoryDecayStatsResponse,
    MemoryDecayStatusResponse,
    ReviewActivityResponse,
)
from wordmaster.services.memory import DecayEngine, MemoryEngineConfig
from wordmaster.services.memory.stats import (
    get_memory_decay_stats as build_memory_decay_stats,
    get_memory_decay_status as build_memory_decay_status,
    get_review_activity,
)
from wordmaster.services.stores import MemoryStores

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/words", tags=["words"])


@router.post("/memory-decay", response_model=DecayRunResult)
async def run_memory_decay(
    caller_id: Optional[UUID] = Depends(require_scheduler_or_user),
    engine: DecayEngine = Depends(get_decay_engine),
) -> DecayRunResult:
    """
    Run one decay sweep over all users.

    Accepts the scheduler secret or any authenticated user. Per-record
    failures are reported in failed_count, not as an error response.
    """
    logger.info(f"Memory decay triggered by {'scheduler' if caller_id is None else f'user {caller_id}'}")
    return engine.run()


@router.get("/memory-decay-stats", response_model=MemoryDecayStatsResponse)
async def get_memory_decay_stats(
    user_id: UUID = Depends(require_current_user_id),
    config: MemoryEngineConfig = Depends(get_memory_config),
    db: Session = Depends(get_db),
) -> MemoryDecayStatsResponse:
    """Memory level distribution over five bands plus decay eligibility."""
    return build_memory_decay_stats(db, user_id, config, datetime.now(timezone.utc))


@router.get("/memory-decay-status", response_model=MemoryDecayStatusResponse)
async def get_memory_decay_status(
    user_id: UUID = Depends(require_current_user_id),
    db: Session = Depends(get_db),
) -> MemoryDecayStatusResponse:
    """Today's activity and the last seven days."""
    return build_memory_decay_status(db, user_id, datetime.now(timezone.utc).date())


@router.get("/review-history", response_model=ReviewActivityResponse)
async def get_review_history(
    user_id: UUID = Depends(require_current_user_id),
    db: Session = Depends(get_db),
) -> ReviewActivityResponse:
    """Thirty days of daily review and decay counts."""
    return get_review_activity(db, user_id, datetime.now(timezone.utc).date())


@router.put("/{user_word_id}/memory-level", response_model=UserWordRead)
async def update_memory_level(
    user_word_id: UUID,
    data: MemoryLevelUpdate,
    user_id: UUID = Depends(require_current_user_id),
    stores: MemoryStores = Depends(get_stores),
) -> UserWordRead:
    """
    Manually set a word's memory level.

    Raises:
        404: Word not in the user's vocabulary
        422: Level outside 0-100
    """
    return stores.records.set_memory_level(
        user_id, user_word_id, data.memory_level, datetime.now(timezone.utc)
    )
