from __future__ import annotations

from typing import Dict, Type

from .interface import CarState, Scheduler, Stop, travels
from .look import LookScheduler

__all__ = [
    "CarState",
    "LookScheduler",
    "Scheduler",
    "Stop",
    "get_scheduler",
    "travels",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "look": LookScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
