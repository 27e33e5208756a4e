"""
Scheduler Orchestrator

Owns the single APScheduler instance that runs every background workflow.
Jobs are cron-triggered on UTC wall-clock time. Missed and failed runs are
logged through an APScheduler event listener.
"""
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED, JobExecutionEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from typing import Dict, Any, Optional, List
import logging

logger = logging.getLogger(__name__)

SCHEDULER_TIMEZONE = "UTC"


class SchedulerOrchestrator:
    """Shared AsyncIOScheduler plus start/stop and status reporting."""

    def __init__(self):
        self._scheduler = AsyncIOScheduler(timezone=SCHEDULER_TIMEZONE)
        self._scheduler.add_listener(self._on_job_event, EVENT_JOB_ERROR | EVENT_JOB_MISSED)
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def start(self):
        if self._is_running:
            logger.warning("Scheduler start requested while already running")
            return

        self._scheduler.start()
        self._is_running = True
        logger.info(f"Scheduler started with {len(self.get_all_jobs())} jobs ({SCHEDULER_TIMEZONE})")

    async def stop(self):
        if not self._is_running:
            return

        # wait=True lets an in-flight decay sweep finish its transaction
        self._scheduler.shutdown(wait=True)
        self._is_running = False
        logger.info("Scheduler stopped")

    def add_job(self, *args, **kwargs):
        """Pass-through to AsyncIOScheduler.add_job."""
        return self._scheduler.add_job(*args, **kwargs)

    def get_job(self, job_id: str):
        return self._scheduler.get_job(job_id)

    def get_all_jobs(self) -> List:
        return self._scheduler.get_jobs()

    def get_status(self) -> Dict[str, Any]:
        """Running flag, timezone, and each job's trigger and next fire time."""
        jobs = self.get_all_jobs()

        return {
            "running": self._is_running,
            "timezone": SCHEDULER_TIMEZONE,
            "total_jobs": len(jobs),
            "jobs": [
                {
                    "id": job.id,
                    "name": job.name,
                    "trigger": str(job.trigger),
                    "next_run": _next_run_iso(job),
                }
                for job in jobs
            ]
        }

    @staticmethod
    def _on_job_event(event: JobExecutionEvent) -> None:
        if event.code == EVENT_JOB_MISSED:
            logger.warning(f"Job {event.job_id} missed its {event.scheduled_run_time.isoformat()} run")
        elif event.exception is not None:
            logger.error(f"Job {event.job_id} raised: {event.exception}")


def _next_run_iso(job) -> Optional[str]:
    # next_run_time is missing until the scheduler starts
    next_run_time = getattr(job, "next_run_time", None)
    return next_run_time.isoformat() if next_run_time else None


_scheduler_orchestrator: Optional[SchedulerOrchestrator] = None


def get_scheduler_orchestrator() -> SchedulerOrchestrator:
    """Process-wide orchestrator, created on first use."""
    global _scheduler_orchestrator
    if _scheduler_orchestrator is None:
        _scheduler_orchestrator = SchedulerOrchestrator()
    return _scheduler_orchestrator
