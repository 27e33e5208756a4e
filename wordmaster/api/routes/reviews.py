"""
Review API Routes

Record review actions (known / review / skip) for the authenticated user.
All routes are thin HTTP adapters - scoring logic in ReviewEngine.
"""

from datetime import datetime, timedelta, timezone
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wordmaster.api.deps import get_review_engine
from wordmaster.core.auth import require_current_user_id
from wordmaster.models.database.review_history import ReviewHistoryRead
from wordmaster.models.dto.reviews import (
    BatchReviewRequest,
    BatchReviewResult,
    ReviewRequest,
    ReviewResult,
)
from wordmaster.services.memory import ReviewEngine

router = APIRouter(prefix="/reviews", tags=["reviews"])


class BatchReviewResponse(BatchReviewResult):
    succeeded: int
    failed: int


@router.post("", response_model=ReviewResult)
async def apply_review(
    request: ReviewRequest,
    user_id: UUID = Depends(require_current_user_id),
    engine: ReviewEngine = Depends(get_review_engine),
) -> ReviewResult:
    """
    Apply one review action.

    Raises:
        404: Word not in the user's vocabulary
        400: Memory level outside 0-100
        422: Unknown action_type
    """
    return engine.apply(user_id, request)


@router.post("/batch", response_model=BatchReviewResponse)
async def apply_review_batch(
    batch: BatchReviewRequest,
    user_id: UUID = Depends(require_current_user_id),
    engine: ReviewEngine = Depends(get_review_engine),
) -> BatchReviewResponse:
    """
    Apply up to 100 review actions. Failed items are listed in `failures`;
    the rest are applied.
    """
    result = engine.apply_batch(user_id, batch.reviews)
    return BatchReviewResponse(
        results=result.results,
        failures=result.failures,
        succeeded=result.succeeded_count,
        failed=result.failed_count,
    )


@router.get("/recent", response_model=List[ReviewHistoryRead])
async def get_recent_reviews(
    word_id: UUID = Query(..., description="Catalog word ID"),
    user_id: UUID = Depends(require_current_user_id),
    engine: ReviewEngine = Depends(get_review_engine),
) -> List[ReviewHistoryRead]:
    """History for one word inside the quick-learner window, newest first."""
    since = datetime.now(timezone.utc) - timedelta(hours=engine.config.quick_learner_window_hours)
    return engine.recent_reviews(user_id, word_id, since)
