"""
Memory Decay Workflow Scheduler

Runs the decay sweep across all users once a day (DECAY_CRON_HOUR UTC).
Supports scheduled and manual (API) triggers.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, ContextManager, Optional
import logging

from sqlmodel import Session

from wordmaster.core.config import settings
from wordmaster.core.database import get_db_session
from wordmaster.services.memory.config import MemoryEngineConfig
from wordmaster.services.memory.decay_engine import DecayEngine
from wordmaster.services.stores import build_sql_stores
from ..scheduler_base import SchedulerBase
from ..scheduler_orchestrator import SchedulerOrchestrator

logger = logging.getLogger(__name__)


class MemoryDecayScheduler(SchedulerBase):
    """
    Memory decay workflow scheduler.

    One sweep covers every user. Overlapping runs (scheduled + manual) are
    skipped rather than queued.
    """

    def __init__(
        self,
        session_factory: Callable[[], ContextManager[Session]] = get_db_session,
        config: Optional[MemoryEngineConfig] = None,
        orchestrator: Optional[SchedulerOrchestrator] = None,
    ):
        super().__init__(orchestrator)
        self._session_factory = session_factory
        self._config = config
        self._lock = asyncio.Lock()

    @property
    def workflow_name(self) -> str:
        return "memory_decay"

    @property
    def cron_hour(self) -> int:
        return settings.DECAY_CRON_HOUR

    async def execute(self) -> dict[str, Any]:
        """
        Run one decay sweep.

        Sync DB work runs in a dedicated thread via asyncio.to_thread()
        so the event loop is never blocked.
        """
        if self._lock.locked():
            logger.info("Memory decay already running, skipping")
            return {"success": True, "skipped": True, "reason": "already_running"}

        async with self._lock:
            run_start = datetime.now(timezone.utc)
            logger.info("Starting memory decay run")

            try:
                result = await asyncio.to_thread(self._execute_sync, run_start)
            except Exception as e:
                logger.error(f"Memory decay run failed: {e}", exc_info=True)
                self._record_run(run_start, success=False)
                return {"success": False, "skipped": False, "error": str(e)}

            self._record_run(run_start, success=True, items=result["decayed_count"])
            return {
                "success": True,
                "skipped": False,
                **result,
                "run_time": (datetime.now(timezone.utc) - run_start).total_seconds(),
            }

    def _execute_sync(self, now: datetime) -> dict[str, Any]:
        """Sync decay execution, runs in a worker thread."""
        with self._session_factory() as session:
            stores = build_sql_stores(session)
            engine = DecayEngine(stores.records, stores.history, stores.daily_stats, self._config)
            result = engine.run(now)
        return result.model_dump(mode="json")


# Singleton instance
_memory_decay_scheduler: Optional[MemoryDecayScheduler] = None


def get_memory_decay_scheduler() -> MemoryDecayScheduler:
    """Get or create memory decay scheduler singleton."""
    global _memory_decay_scheduler
    if _memory_decay_scheduler is None:
        _memory_decay_scheduler = MemoryDecayScheduler()
    return _memory_decay_scheduler
