"""
One-off memory decay run.

Runs the same sweep as the daily scheduler job against DATABASE_URL.

Usage:
    python scripts/run_memory_decay.py --dry-run
    python scripts/run_memory_decay.py
    python scripts/run_memory_decay.py --as-of "2026-01-24 02:00:00"

--dry-run computes the full sweep and rolls it back.
"""

import argparse
import logging
import sys
from datetime import datetime, timezone

sys.path.insert(0, '.')

from wordmaster.algos.mem_scoring.recency import ensure_utc
from wordmaster.core.database import SessionLocal
from wordmaster.services.memory import DecayEngine
from wordmaster.services.stores import build_sql_stores


def parse_as_of(value: str) -> datetime:
    try:
        return ensure_utc(datetime.fromisoformat(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid timestamp: {value!r} (expected ISO format)")


def run_decay(as_of: datetime, dry_run: bool) -> int:
    session = SessionLocal()
    try:
        stores = build_sql_stores(session)
        result = DecayEngine(stores.records, stores.history, stores.daily_stats).run(as_of)

        if dry_run:
            session.rollback()
            print("DRY RUN - no changes written")
        else:
            session.commit()

        print(result.message)
        print(f"  decayed:     {result.decayed_count}")
        print(f"  total decay: {result.total_decay_amount}")
        print(f"  failed:      {result.failed_count}")
        for failed_id in result.failed_ids:
            print(f"    - {failed_id}")

        return 1 if result.failed_count else 0
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(description="Apply memory decay to all users' words")
    parser.add_argument("--dry-run", action="store_true", help="Preview without writing")
    parser.add_argument(
        "--as-of",
        type=parse_as_of,
        default=None,
        help="Reference time, UTC unless an offset is given (default: now)"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(run_decay(args.as_of or datetime.now(timezone.utc), args.dry_run))


if __name__ == "__main__":
    main()
