"""
ReviewHistory Operations - Domain Logic Layer

Append and windowed reads for the review history log.
History entries are immutable: there is no update or delete.
"""

from datetime import datetime
from typing import List
from uuid import UUID

from sqlalchemy import select, and_
from sqlmodel import Session

from wordmaster.models.database.review_history import ReviewHistory, ReviewHistoryCreate


class ReviewHistoryOperations:
    """Domain operations for ReviewHistory entity (static methods, flush only)."""

    @staticmethod
    def create(session: Session, data: ReviewHistoryCreate, created_at: datetime | None = None) -> ReviewHistory:
        """Append history entry. Pattern: create → add → flush."""
        entry = ReviewHistory(**data.model_dump())
        if created_at is not None:
            entry.created_at = created_at
            entry.updated_at = created_at
        session.add(entry)
        session.flush()
        return entry

    @staticmethod
    def get_recent_for_word(
        session: Session,
        user_id: UUID,
        word_id: UUID,
        since: datetime
    ) -> List[ReviewHistory]:
        """History for (user, word) created after `since`. Ordered newest first."""
        result = session.execute(
            select(ReviewHistory)
            .where(
                and_(
                    ReviewHistory.user_id == user_id,
                    ReviewHistory.word_id == word_id,
                    ReviewHistory.created_at > since,
                )
            )
            .order_by(ReviewHistory.created_at.desc())
        )
        return list(result.scalars().all())
