"""
Feed priority algorithm.

Scores how urgently a word should be shown (0-100, higher = sooner):
- base 50
- staleness: +30 (>7 days), +20 (>3 days), +10 (>1 day)
- freshness: -20 if reviewed within the last 12 hours
- memory: +15 for struggling words (<20), -15 for mastered words (>80)
"""

from datetime import datetime
from typing import Optional

from wordmaster.algos.mem_scoring.recency import compute_days_since

BASE_PRIORITY = 50.0


def compute_priority_score(
    last_reviewed_at: Optional[datetime],
    memory_level: float,
    reference_time: Optional[datetime] = None,
) -> float:
    """
    Compute feed priority for one word.

    Args:
        last_reviewed_at: Last review time (None = never reviewed, maximally stale)
        memory_level: Current memory level (0-100)
        reference_time: Point in time to compute from (default: now UTC)

    Returns:
        Score from 0.0 to 100.0
    """
    days_since_review = compute_days_since(last_reviewed_at, reference_time)

    priority = BASE_PRIORITY

    if days_since_review > 7:
        priority += 30
    elif days_since_review > 3:
        priority += 20
    elif days_since_review > 1:
        priority += 10

    # Independent of the staleness tiers (thresholds never overlap)
    if days_since_review < 0.5:
        priority -= 20

    if memory_level < 20:
        priority += 15
    elif memory_level > 80:
        priority -= 15

    return max(0.0, min(100.0, priority))
