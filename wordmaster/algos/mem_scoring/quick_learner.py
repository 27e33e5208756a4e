"""Quick-learner detection over an already time-windowed review history."""

from typing import Iterable, Protocol

from wordmaster.models.database.review_history import ReviewActionType


class HasActionType(Protocol):
    action_type: ReviewActionType


def count_marked_known(recent_reviews: Iterable[HasActionType]) -> int:
    return sum(1 for r in recent_reviews if r.action_type == ReviewActionType.MARKED_KNOWN)


def should_mark_as_quick_learner(
    recent_reviews: Iterable[HasActionType],
    threshold: int = 2,
) -> bool:
    """
    True iff recent_reviews holds at least `threshold` marked_known entries.

    Callers pass history that already includes the action being recorded.
    """
    return count_marked_known(recent_reviews) >= threshold
