"""
Scheduler API

Status for the scheduler and every registered workflow, plus manual
triggers. Triggers accept the scheduler secret so an external cron can
stand in when in-process jobs are disabled.
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, Any, Optional
from uuid import UUID

from wordmaster.core.auth import require_current_user_id, require_scheduler_or_user
from wordmaster.services.scheduler import WORKFLOW_REGISTRY, get_scheduler_orchestrator

router = APIRouter(prefix="/scheduler", tags=["Scheduler"])


@router.get("/status")
async def get_scheduler_status(
    user_id: UUID = Depends(require_current_user_id),
) -> Dict[str, Any]:
    """Scheduler state, registered jobs, and per-workflow run stats."""
    return {
        "scheduler": get_scheduler_orchestrator().get_status(),
        "workflows": {
            name: get_workflow().get_status()
            for name, get_workflow in WORKFLOW_REGISTRY.items()
        }
    }


@router.post("/workflows/{workflow_name}/trigger")
async def trigger_workflow(
    workflow_name: str,
    caller_id: Optional[UUID] = Depends(require_scheduler_or_user),
) -> Dict[str, Any]:
    """
    Run a workflow now, outside its daily schedule.

    Overlapping runs are not queued: the result reports `skipped`.

    **Available workflows:**
    - `memory_decay`: Decay sweep across all users
    """
    get_workflow = WORKFLOW_REGISTRY.get(workflow_name)
    if get_workflow is None:
        raise HTTPException(status_code=404, detail=f"Unknown workflow: {workflow_name}")

    result = await get_workflow().trigger_manual()

    return {
        "workflow": workflow_name,
        "triggered_by": "scheduler" if caller_id is None else str(caller_id),
        "result": result,
    }
