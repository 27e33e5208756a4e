"""
DailyStat Operations - Domain Logic Layer

Per-user daily counters. Rows are created lazily on first increment.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, and_
from sqlmodel import Session

from wordmaster.domain.exceptions import DomainValidationError
from wordmaster.models.database.daily_stats import DailyStat, DAILY_STAT_COUNTERS


class DailyStatOperations:
    """Domain operations for DailyStat entity (static methods, flush only)."""

    @staticmethod
    def get_for_date(session: Session, user_id: UUID, stat_date: date) -> Optional[DailyStat]:
        result = session.execute(
            select(DailyStat).where(
                and_(DailyStat.user_id == user_id, DailyStat.stat_date == stat_date)
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def increment(session: Session, user_id: UUID, stat_date: date, **counters: int) -> DailyStat:
        """
        Add counters to the (user, stat_date) row, creating it if missing.

        Example: increment(session, user_id, today, words_decayed=12)
        """
        unknown = set(counters) - DAILY_STAT_COUNTERS
        if unknown:
            raise DomainValidationError(f"Unknown daily stat counters: {sorted(unknown)}")

        stat = DailyStatOperations.get_for_date(session, user_id, stat_date)
        if stat is None:
            stat = DailyStat(user_id=user_id, stat_date=stat_date)

        for counter, amount in counters.items():
            setattr(stat, counter, (getattr(stat, counter) or 0) + amount)

        session.add(stat)
        session.flush()
        return stat

    @staticmethod
    def list_since(session: Session, user_id: UUID, since: date, ascending: bool = True) -> List[DailyStat]:
        """User's stats on or after `since`."""
        order = DailyStat.stat_date.asc() if ascending else DailyStat.stat_date.desc()
        result = session.execute(
            select(DailyStat)
            .where(and_(DailyStat.user_id == user_id, DailyStat.stat_date >= since))
            .order_by(order)
        )
        return list(result.scalars().all())
