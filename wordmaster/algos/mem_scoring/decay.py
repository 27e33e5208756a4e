"""
Memory decay algorithm.

Memory level erodes by a fixed fraction of the *current* level for every
whole day past the grace period since the last review:

    decay_days     = days_since_review - grace_period_days
    decay_fraction = decay_days * decay_rate_per_day
    new_level      = round(max(0, level * (1 - decay_fraction)), 1)

Example: level 50, reviewed 10 days ago, grace 1, rate 0.05
    → decay_days 9, fraction 0.45, new level 27.5
"""

import math
from datetime import datetime
from typing import Optional

from wordmaster.algos.mem_scoring.recency import compute_days_since


def compute_days_since_review(
    last_reviewed_at: Optional[datetime],
    reference_time: Optional[datetime] = None,
) -> int:
    """Whole days since last review. Never-reviewed words count as 0 (added today)."""
    if last_reviewed_at is None:
        return 0
    return max(0, math.floor(compute_days_since(last_reviewed_at, reference_time)))


def compute_decayed_level(
    memory_level: float,
    days_since_review: int,
    grace_period_days: int = 1,
    decay_rate_per_day: float = 0.05,
) -> float:
    """
    Compute the decayed memory level.

    Returns memory_level unchanged while inside the grace period.
    Never returns more than memory_level or less than 0.
    """
    if days_since_review < grace_period_days:
        return memory_level

    decay_days = days_since_review - grace_period_days
    decay_fraction = decay_days * decay_rate_per_day
    new_level = max(0.0, memory_level * (1 - decay_fraction))

    return min(memory_level, round(new_level, 1))
