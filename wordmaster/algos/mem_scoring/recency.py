"""
Recency helpers.

Time arithmetic shared by the decay and priority algorithms. All inputs
are normalized to aware UTC datetimes (SQLite returns naive values).
"""

from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 86400

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_days_since(
    timestamp: Optional[datetime],
    reference_time: Optional[datetime] = None,
) -> float:
    """
    Fractional days between timestamp and reference_time (default: now UTC).

    A missing timestamp is measured from the Unix epoch, i.e. maximally stale.
    """
    if reference_time is None:
        reference_time = datetime.now(timezone.utc)
    reference_time = ensure_utc(reference_time)

    timestamp = ensure_utc(timestamp) if timestamp is not None else EPOCH

    return (reference_time - timestamp).total_seconds() / SECONDS_PER_DAY
