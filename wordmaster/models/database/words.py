"""Words model - static vocabulary catalog entries (read-only to the memory engine)."""

from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from wordmaster.models.database.mixins.timestamp import TimestampMixin


class DifficultyLevel(str, Enum):
    """Word difficulty, derived from word length at catalog time."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very_hard"


class PartOfSpeech(str, Enum):
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PHRASE = "phrase"
    OTHER = "other"


class WordBase(SQLModel):
    """Shared fields for Word model."""
    word_text: str = Field(max_length=255, index=True, description="Word or phrase as displayed")
    word_length: int = Field(ge=1, description="Character length of word_text")
    difficulty_level: DifficultyLevel = Field(default=DifficultyLevel.MEDIUM, index=True)
    part_of_speech: PartOfSpeech | None = Field(default=None, nullable=True, index=True)
    definition: str = Field(default="", description="Short definition")
    phonetic: str | None = Field(default=None, nullable=True)
    language: str = Field(default="en", max_length=10)


class Word(WordBase, TimestampMixin, table=True):
    """Catalog word. Inherits created_at, updated_at from TimestampMixin."""
    __tablename__ = "words"

    id: UUID = Field(default_factory=uuid4, primary_key=True)


class WordRead(WordBase):
    """Data returned when reading a Word."""
    id: UUID
