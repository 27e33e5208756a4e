"""
UserWord Operations - Domain Logic Layer

Queries and mutations for memory records.
Follows static method pattern: no instance state, session passed as parameter.
No transaction management - callers handle commits/rollbacks; domain layer uses flush() only.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, and_, or_, func
from sqlmodel import Session

from wordmaster.domain.exceptions import EntityNotFoundError, DomainValidationError
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.database.words import Word


class UserWordOperations:
    """
    Domain operations for UserWord (memory record) entity.

    Pattern: Static methods, sync operations, no transaction management.
    """

    @staticmethod
    def get_by_id(session: Session, user_word_id: UUID) -> Optional[UserWord]:
        """Get memory record by ID. Returns None if not found."""
        result = session.execute(
            select(UserWord).where(UserWord.id == user_word_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def get_for_user(session: Session, user_id: UUID, user_word_id: UUID) -> UserWord:
        """Get memory record owned by user. Raises EntityNotFoundError otherwise."""
        user_word = UserWordOperations.get_by_id(session, user_word_id)
        if not user_word or user_word.user_id != user_id:
            raise EntityNotFoundError("UserWord", user_word_id)
        return user_word

    @staticmethod
    def list_with_words(
        session: Session,
        user_id: UUID,
        include_archived: bool = False
    ) -> List[Tuple[UserWord, Word]]:
        """All memory records for user joined with catalog words. Ordered by created_at ASC."""
        conditions = [UserWord.user_id == user_id]
        if not include_archived:
            conditions.append(UserWord.is_archived.is_(False))

        result = session.execute(
            select(UserWord, Word)
            .join(Word, Word.id == UserWord.word_id)
            .where(and_(*conditions))
            .order_by(UserWord.created_at.asc(), UserWord.id.asc())
        )
        return [(user_word, word) for user_word, word in result.all()]

    @staticmethod
    def list_decay_candidates(
        session: Session,
        mastered_threshold: float,
        reviewed_before: datetime,
        user_id: Optional[UUID] = None
    ) -> List[UserWord]:
        """
        Records eligible for decay: below mastery and not reviewed since reviewed_before
        (or never reviewed). Optionally scoped to one user.
        """
        conditions = [
            UserWord.memory_level < mastered_threshold,
            or_(
                UserWord.last_reviewed_at.is_(None),
                UserWord.last_reviewed_at < reviewed_before,
            ),
        ]
        if user_id is not None:
            conditions.append(UserWord.user_id == user_id)

        result = session.execute(
            select(UserWord).where(and_(*conditions)).order_by(UserWord.id)
        )
        return list(result.scalars().all())

    @staticmethod
    def count_decay_candidates(
        session: Session,
        user_id: UUID,
        mastered_threshold: float,
        reviewed_before: datetime
    ) -> int:
        """Count user's records currently eligible for decay."""
        result = session.execute(
            select(func.count()).select_from(UserWord).where(
                and_(
                    UserWord.user_id == user_id,
                    UserWord.memory_level < mastered_threshold,
                    or_(
                        UserWord.last_reviewed_at.is_(None),
                        UserWord.last_reviewed_at < reviewed_before,
                    ),
                )
            )
        )
        return result.scalar_one()

    @staticmethod
    def list_memory_levels(session: Session, user_id: UUID) -> List[float]:
        """Memory levels of all user's records (for distribution stats)."""
        result = session.execute(
            select(UserWord.memory_level).where(UserWord.user_id == user_id)
        )
        return [level for (level,) in result.all()]

    @staticmethod
    def set_memory_level(
        session: Session,
        user_id: UUID,
        user_word_id: UUID,
        memory_level: float,
        updated_at: datetime
    ) -> UserWord:
        """
        Manual memory level override. 100 is the authoritative cap.
        Raises EntityNotFoundError / DomainValidationError.
        """
        if not 0 <= memory_level <= 100:
            raise DomainValidationError("Memory level must be between 0 and 100")

        user_word = UserWordOperations.get_for_user(session, user_id, user_word_id)
        user_word.memory_level = memory_level
        user_word.last_memory_update_at = updated_at
        session.add(user_word)
        session.flush()
        return user_word
