# Memory scoring algorithms
# Pure functions for decay, review gains and feed priority

from wordmaster.algos.mem_scoring.recency import compute_days_since, ensure_utc
from wordmaster.algos.mem_scoring.decay import compute_days_since_review, compute_decayed_level
from wordmaster.algos.mem_scoring.priority import compute_priority_score
from wordmaster.algos.mem_scoring.quick_learner import should_mark_as_quick_learner
from wordmaster.algos.mem_scoring.review import MemoryIncrease, compute_memory_increase
from wordmaster.algos.mem_scoring.classification import (
    classify_difficulty,
    classify_memory_level,
    memory_band,
    memory_bucket,
)

__all__ = [
    "compute_days_since",
    "ensure_utc",
    "compute_days_since_review",
    "compute_decayed_level",
    "compute_priority_score",
    "should_mark_as_quick_learner",
    "MemoryIncrease",
    "compute_memory_increase",
    "classify_difficulty",
    "classify_memory_level",
    "memory_band",
    "memory_bucket",
]
