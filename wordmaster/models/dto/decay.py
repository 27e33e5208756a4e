"""DTOs for memory decay runs."""

from typing import List
from uuid import UUID

from pydantic import BaseModel, Field


class DecayRunResult(BaseModel):
    """Outcome of one decay sweep. failed_ids lists records skipped on error."""

    decayed_count: int = 0
    total_decay_amount: float = 0.0
    failed_count: int = 0
    failed_ids: List[UUID] = Field(default_factory=list)
    message: str
