"""API dependencies: request-scoped stores and engines."""

from fastapi import Depends
from sqlmodel import Session

from wordmaster.core.database import get_db
from wordmaster.services.memory import DecayEngine, FeedEngine, MemoryEngineConfig, ReviewEngine
from wordmaster.services.stores import MemoryStores, build_sql_stores


def get_memory_config() -> MemoryEngineConfig:
    return MemoryEngineConfig.from_settings()


def get_stores(db: Session = Depends(get_db)) -> MemoryStores:
    """SQL stores bound to the request session (committed by get_db)."""
    return build_sql_stores(db)


def get_review_engine(
    stores: MemoryStores = Depends(get_stores),
    config: MemoryEngineConfig = Depends(get_memory_config),
) -> ReviewEngine:
    return ReviewEngine(stores.records, stores.history, stores.daily_stats, config)


def get_feed_engine(
    stores: MemoryStores = Depends(get_stores),
    config: MemoryEngineConfig = Depends(get_memory_config),
) -> FeedEngine:
    return FeedEngine(stores.records, config)


def get_decay_engine(
    stores: MemoryStores = Depends(get_stores),
    config: MemoryEngineConfig = Depends(get_memory_config),
) -> DecayEngine:
    return DecayEngine(stores.records, stores.history, stores.daily_stats, config)
