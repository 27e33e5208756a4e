"""
Workflow Implementations

Specific workflow schedulers.
"""
from .memory_decay_scheduler import (
    get_memory_decay_scheduler,
    MemoryDecayScheduler,
)

__all__ = [
    "get_memory_decay_scheduler",
    "MemoryDecayScheduler",
]
