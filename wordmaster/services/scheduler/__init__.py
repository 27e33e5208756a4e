"""
Scheduler Module

Modular scheduler infrastructure for workflow orchestration.
"""
from .scheduler_orchestrator import get_scheduler_orchestrator, SchedulerOrchestrator
from .scheduler_base import SchedulerBase
from .workflows.memory_decay_scheduler import (
    get_memory_decay_scheduler,
    MemoryDecayScheduler,
)

# workflow_name -> singleton getter (manual trigger endpoint)
WORKFLOW_REGISTRY = {
    "memory_decay": get_memory_decay_scheduler,
}

__all__ = [
    "get_scheduler_orchestrator",
    "SchedulerOrchestrator",
    "SchedulerBase",
    "get_memory_decay_scheduler",
    "MemoryDecayScheduler",
    "WORKFLOW_REGISTRY",
]
