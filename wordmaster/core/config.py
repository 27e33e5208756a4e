"""Application configuration via Pydantic Settings."""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API Settings
    PROJECT_NAME: str = "Wordmaster Memory API"
    VERSION: str = "0.3.0"
    API_PREFIX: str = "/api"

    # Database Settings
    # postgresql:// URLs get the +psycopg driver added in database.py
    # sqlite:// URLs are accepted for local runs
    DATABASE_URL: str = "sqlite:///./wordmaster.db"
    MIGRATION_DATABASE_URL: str = ""  # Direct connection for Alembic (falls back to DATABASE_URL)

    def get_migration_database_url(self) -> str:
        """Migration URL, or the runtime URL when no direct connection is configured."""
        return self.MIGRATION_DATABASE_URL or self.DATABASE_URL

    # Auth (tokens are issued by the external auth provider)
    JWT_SECRET: str = ""  # HS256 signing secret; empty = dev mode (all tokens rejected)
    JWT_AUDIENCE: str = "authenticated"
    SCHEDULER_SECRET: str = ""  # Bearer secret accepted by the decay trigger endpoint

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = []

    # Background Jobs
    ENABLE_BACKGROUND_JOBS: bool = True  # Set false locally to avoid decaying shared data
    DECAY_CRON_HOUR: int = 2  # Daily decay run, UTC hour

    # Rate limiting
    RATE_LIMIT: str = "100/second"

    # Memory engine
    MASTERED_THRESHOLD: float = 80.0
    DECAY_RATE_PER_DAY: float = 0.05  # Fraction of current level per day past the grace period
    GRACE_PERIOD_DAYS: int = 1
    QUICK_LEARNER_WINDOW_HOURS: int = 48
    QUICK_LEARNER_THRESHOLD: int = 2
    REVIEW_BASE_INCREASE: int = 10
    FEED_MAX_LIMIT: int = 100
    FEED_DEFAULT_LIMIT: int = 50


# Global settings instance
settings = Settings()
