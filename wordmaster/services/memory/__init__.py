"""Memory engines: decay sweep, review scoring and feed ranking."""

from .config import MemoryEngineConfig
from .decay_engine import DecayEngine
from .feed_engine import FeedEngine, build_feed_query
from .review_engine import ReviewEngine

__all__ = [
    "MemoryEngineConfig",
    "DecayEngine",
    "FeedEngine",
    "ReviewEngine",
    "build_feed_query",
]
