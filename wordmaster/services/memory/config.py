"""
Memory Engine Configuration

Tunable constants for decay, review scoring and the feed.
Defaults come from Settings so deployments can override them via env.
"""

from dataclasses import dataclass, asdict
from typing import Any

from wordmaster.core.config import settings


@dataclass(frozen=True)
class MemoryEngineConfig:
    """
    Configuration shared by the decay, review and feed engines.

    Memory levels use a 0-100 scale.
    """

    # ─────────────────────────────────────────────────────────────
    # Decay
    # ─────────────────────────────────────────────────────────────
    mastered_threshold: float = 80.0
    """Records at or above this level never decay."""

    decay_rate_per_day: float = 0.05
    """Fraction of the current level lost per whole day past the grace period."""

    grace_period_days: int = 1
    """Whole days after a review before decay starts."""

    # ─────────────────────────────────────────────────────────────
    # Review Scoring
    # ─────────────────────────────────────────────────────────────
    review_base_increase: int = 10
    """Points added by every known review before bonuses."""

    quick_learner_window_hours: int = 48
    """Lookback window for quick-learner detection."""

    quick_learner_threshold: int = 2
    """marked_known count within the window (current action included) that flags a quick learner."""

    # ─────────────────────────────────────────────────────────────
    # Feed
    # ─────────────────────────────────────────────────────────────
    feed_default_limit: int = 50
    feed_max_limit: int = 100

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_settings(cls) -> "MemoryEngineConfig":
        """Build config from the global Settings instance."""
        return cls(
            mastered_threshold=settings.MASTERED_THRESHOLD,
            decay_rate_per_day=settings.DECAY_RATE_PER_DAY,
            grace_period_days=settings.GRACE_PERIOD_DAYS,
            review_base_increase=settings.REVIEW_BASE_INCREASE,
            quick_learner_window_hours=settings.QUICK_LEARNER_WINDOW_HOURS,
            quick_learner_threshold=settings.QUICK_LEARNER_THRESHOLD,
            feed_default_limit=settings.FEED_DEFAULT_LIMIT,
            feed_max_limit=settings.FEED_MAX_LIMIT,
        )
