"""Database models - import all models to ensure proper registration."""

from wordmaster.models.database.words import Word
from wordmaster.models.database.user_words import UserWord
from wordmaster.models.database.review_history import ReviewHistory
from wordmaster.models.database.daily_stats import DailyStat

__all__ = [
    "Word",
    "UserWord",
    "ReviewHistory",
    "DailyStat",
]
