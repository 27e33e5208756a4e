"""DTOs for review actions (mark known / mark for review / skip)."""

from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from wordmaster.models.database.review_history import ReviewActionType


class ReviewAction(str, Enum):
    """User-facing review action. Closed set, validated at the API boundary."""
    KNOWN = "known"
    REVIEW = "review"
    SKIP = "skip"

    @property
    def history_type(self) -> ReviewActionType:
        return _HISTORY_TYPES[self]


_HISTORY_TYPES = {
    ReviewAction.KNOWN: ReviewActionType.MARKED_KNOWN,
    ReviewAction.REVIEW: ReviewActionType.MARKED_REVIEW,
    ReviewAction.SKIP: ReviewActionType.SKIPPED,
}


class ReviewRequest(BaseModel):
    """
    A single review action for one of the caller's words.

    current_memory_level defaults to the stored level. Out-of-range values
    are rejected by the review engine (400), not by schema validation.
    """

    user_word_id: UUID
    word_id: UUID
    action_type: ReviewAction
    quick_learning_enabled: bool = True
    current_memory_level: Optional[float] = None
    session_id: Optional[str] = Field(default=None, max_length=64)


class ReviewResult(BaseModel):
    user_word_id: UUID
    action_type: ReviewAction
    memory_before: float
    new_memory_level: float
    memory_change: float
    bonus_applied: int = 0
    is_quick_learner: bool = False
    reason: str


class BatchReviewRequest(BaseModel):
    reviews: List[ReviewRequest] = Field(min_length=1, max_length=100)


class BatchReviewFailure(BaseModel):
    user_word_id: UUID
    error: str


class BatchReviewResult(BaseModel):
    """Batch outcome. Non-empty failures means partial success, not a failed request."""

    results: List[ReviewResult] = Field(default_factory=list)
    failures: List[BatchReviewFailure] = Field(default_factory=list)

    @property
    def succeeded_count(self) -> int:
        return len(self.results)

    @property
    def failed_count(self) -> int:
        return len(self.failures)
