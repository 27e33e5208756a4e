"""
Review scoring algorithm.

Computes the memory gain for a "marked known" review, including the
quick-learner bonus. Bonus tiers are keyed on how many marked_known
actions fall inside the lookback window (current action included):

    2      → +20  quick_learning_2x_within_48h
    3      → +30  quick_learning_3x_within_48h
    4+     → +40  exceptional_recall_4plus_correct (only if every window
                  entry is marked_known, otherwise no bonus)

A record already flagged as quick learner gets a 1.5x multiplier on
(base + bonus), even when the current window earns no bonus tier.
"""

from dataclasses import dataclass
from typing import Sequence

from wordmaster.algos.mem_scoring.quick_learner import (
    HasActionType,
    count_marked_known,
    should_mark_as_quick_learner,
)
from wordmaster.models.database.review_history import ReviewActionType

MAX_MEMORY_LEVEL = 100.0
QUICK_LEARNER_MULTIPLIER = 1.5


@dataclass(frozen=True)
class MemoryIncrease:
    """Breakdown of a memory gain."""

    base_increase: int
    bonus_increase: int
    total_increase: int
    multiplier: float
    reason: str
    is_quick_learner: bool
    new_memory_level: float


def _bonus_tier(recent_reviews: Sequence[HasActionType], known_count: int) -> tuple[int, str]:
    if known_count >= 4:
        scored = [r for r in recent_reviews if r.action_type != ReviewActionType.SYSTEM_DECAY]
        if all(r.action_type == ReviewActionType.MARKED_KNOWN for r in scored):
            return 40, "exceptional_recall_4plus_correct"
        return 0, "standard_review"
    if known_count == 3:
        return 30, "quick_learning_3x_within_48h"
    if known_count == 2:
        return 20, "quick_learning_2x_within_48h"
    return 0, "standard_review"


def compute_memory_increase(
    current_memory_level: float,
    recent_reviews: Sequence[HasActionType],
    is_quick_learner: bool,
    quick_learning_enabled: bool = True,
    base_increase: int = 10,
    quick_learner_threshold: int = 2,
) -> MemoryIncrease:
    """
    Compute the new memory level for a marked_known review.

    Args:
        current_memory_level: Level before the review (0-100)
        recent_reviews: Windowed history INCLUDING the pending marked_known action
        is_quick_learner: Flag persisted on the record by the previous review
        quick_learning_enabled: User preference; False disables all bonuses
        base_increase: Points added by every known review
        quick_learner_threshold: marked_known count that flags a quick learner

    Returns:
        MemoryIncrease with new_memory_level clamped to 100
    """
    detected = should_mark_as_quick_learner(recent_reviews, quick_learner_threshold)

    if not quick_learning_enabled:
        return MemoryIncrease(
            base_increase=base_increase,
            bonus_increase=0,
            total_increase=base_increase,
            multiplier=1.0,
            reason="standard_review_disabled_quick_learning",
            is_quick_learner=detected,
            new_memory_level=min(MAX_MEMORY_LEVEL, current_memory_level + base_increase),
        )

    bonus_increase = 0
    multiplier = 1.0
    reason = "standard_review"

    if detected:
        bonus_increase, reason = _bonus_tier(recent_reviews, count_marked_known(recent_reviews))
    if is_quick_learner:
        multiplier = QUICK_LEARNER_MULTIPLIER
        reason += "_with_quick_learner_multiplier"

    total_increase = round((base_increase + bonus_increase) * multiplier)

    return MemoryIncrease(
        base_increase=base_increase,
        bonus_increase=bonus_increase,
        total_increase=total_increase,
        multiplier=multiplier,
        reason=reason,
        is_quick_learner=detected,
        new_memory_level=min(MAX_MEMORY_LEVEL, current_memory_level + total_increase),
    )
