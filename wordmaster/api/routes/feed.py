"""
Feed API Routes

Priority-ordered review feed for the authenticated user.
Thin HTTP adapter - ranking logic in FeedEngine.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wordmaster.api.deps import get_feed_engine
from wordmaster.core.auth import require_current_user_id
from wordmaster.models.dto.feed import FeedResponse
from wordmaster.services.memory import FeedEngine, build_feed_query

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse)
async def get_feed(
    limit: int = Query(50, description="Page size (clamped to 1-100)"),
    offset: int = Query(0, description="Pagination offset (clamped to >= 0)"),
    memory_level: Optional[str] = Query(None, description="all | learning | reviewing | well_known"),
    difficulty: Optional[str] = Query(None, description="easy | medium | hard | very_hard"),
    part_of_speech: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, description="priority | memory | length | date | alphabetical"),
    user_id: UUID = Depends(require_current_user_id),
    engine: FeedEngine = Depends(get_feed_engine),
) -> FeedResponse:
    """
    Get the user's word feed.

    Filters are ANDed; breakdown stats cover the whole filtered set.

    Raises:
        400: Unknown filter or sort value
    """
    query = build_feed_query(
        limit=limit,
        offset=offset,
        memory_level=memory_level,
        difficulty=difficulty,
        part_of_speech=part_of_speech,
        sort_by=sort_by,
    )
    return engine.get_feed(user_id, query)
