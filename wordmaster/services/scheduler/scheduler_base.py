"""
Scheduler Base Class

A workflow is a named async job that runs once a day at a fixed UTC hour
and can also be triggered from the API. The base class owns registration,
run bookkeeping and the status payload; subclasses supply execute().
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Any, Optional
import logging

from .scheduler_orchestrator import SCHEDULER_TIMEZONE, get_scheduler_orchestrator, SchedulerOrchestrator

logger = logging.getLogger(__name__)

# A run missed by up to an hour (deploy, restart) still fires once
MISFIRE_GRACE_SECONDS = 3600


class SchedulerBase(ABC):
    """
    Daily cron workflow.

    Subclasses implement:
    - workflow_name (property)
    - cron_hour (property)
    - execute() (async method, returns a dict with `success`)
    """

    def __init__(self, orchestrator: Optional[SchedulerOrchestrator] = None):
        self._scheduler = orchestrator or get_scheduler_orchestrator()
        self._last_run: Optional[datetime] = None
        self._last_success: Optional[bool] = None
        self._stats = {
            "total_runs": 0,
            "successful_runs": 0,
            "failed_runs": 0,
            "items_processed": 0,
        }

    @property
    @abstractmethod
    def workflow_name(self) -> str:
        """Registry key, e.g. 'memory_decay'."""

    @property
    @abstractmethod
    def cron_hour(self) -> int:
        """UTC hour of the daily run."""

    @property
    def job_id(self) -> str:
        return f"{self.workflow_name}_job"

    @abstractmethod
    async def execute(self) -> Dict[str, Any]:
        """One run. Errors are reported in the result, not raised."""

    async def register(self):
        """Add (or replace) this workflow's daily cron job."""
        self._scheduler.add_job(
            func=self.execute,
            trigger="cron",
            hour=self.cron_hour,
            minute=0,
            timezone=SCHEDULER_TIMEZONE,
            id=self.job_id,
            name=f"{self.workflow_name.replace('_', ' ').title()} - Daily",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=MISFIRE_GRACE_SECONDS,
        )

        logger.info(f"Registered {self.job_id}: daily at {self.cron_hour:02d}:00 {SCHEDULER_TIMEZONE}")

    async def trigger_manual(self) -> Dict[str, Any]:
        logger.info(f"Manual trigger: {self.workflow_name}")
        return await self.execute()

    def _record_run(self, started_at: datetime, success: bool, items: int = 0) -> None:
        self._last_run = started_at
        self._last_success = success
        self._stats["total_runs"] += 1
        self._stats["items_processed"] += items
        self._stats["successful_runs" if success else "failed_runs"] += 1

    def get_status(self) -> Dict[str, Any]:
        job = self._scheduler.get_job(self.job_id)
        next_run_time = getattr(job, "next_run_time", None) if job else None

        return {
            "workflow": self.workflow_name,
            "running": job is not None,
            "schedule": f"daily at {self.cron_hour:02d}:00 {SCHEDULER_TIMEZONE}",
            "last_run": self._last_run.isoformat() if self._last_run else None,
            "last_run_succeeded": self._last_success,
            "next_run": next_run_time.isoformat() if next_run_time else None,
            "stats": dict(self._stats),
        }
