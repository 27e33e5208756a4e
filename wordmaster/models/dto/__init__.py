# Data Transfer Objects (DTOs)
# Request/response models for API endpoints

from wordmaster.models.dto.feed import (
    FeedQuery,
    FeedResponse,
    FeedSort,
    FeedWord,
    MemoryLevelFilter,
)
from wordmaster.models.dto.reviews import (
    BatchReviewRequest,
    BatchReviewResult,
    ReviewAction,
    ReviewRequest,
    ReviewResult,
)
from wordmaster.models.dto.decay import DecayRunResult

__all__ = [
    "FeedQuery",
    "FeedResponse",
    "FeedSort",
    "FeedWord",
    "MemoryLevelFilter",
    "BatchReviewRequest",
    "BatchReviewResult",
    "ReviewAction",
    "ReviewRequest",
    "ReviewResult",
    "DecayRunResult",
]
