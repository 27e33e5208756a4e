"""Persistence interfaces for the memory engines."""

from dataclasses import dataclass

from sqlmodel import Session

from .base import DailyStatStore, MemoryRecordStore, ReviewHistoryLog
from .sql import SQLDailyStatStore, SQLMemoryRecordStore, SQLReviewHistoryLog


@dataclass(frozen=True)
class MemoryStores:
    """The three stores an engine may need, bound to one unit of work."""

    records: MemoryRecordStore
    history: ReviewHistoryLog
    daily_stats: DailyStatStore


def build_sql_stores(session: Session) -> MemoryStores:
    """Bind SQL stores to a session (request- or job-scoped)."""
    return MemoryStores(
        records=SQLMemoryRecordStore(session),
        history=SQLReviewHistoryLog(session),
        daily_stats=SQLDailyStatStore(session),
    )


__all__ = [
    "MemoryRecordStore",
    "ReviewHistoryLog",
    "DailyStatStore",
    "MemoryStores",
    "build_sql_stores",
]
