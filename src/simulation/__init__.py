"""Simulation primitives for single-car lift dispatch."""

from .config import DEMO_LAYOUT, HOME_FLOOR, LiftConstraints, configure_logging
from .errors import InvalidCapacityError, InvalidLayoutError, LiftError
from .lift import LiftController, LiftSnapshot, OnChange, run_lift
from .queue import OrderedQueue

__all__ = [
    "DEMO_LAYOUT",
    "HOME_FLOOR",
    "InvalidCapacityError",
    "InvalidLayoutError",
    "LiftConstraints",
    "LiftController",
    "LiftError",
    "LiftSnapshot",
    "OnChange",
    "OrderedQueue",
    "configure_logging",
    "run_lift",
]
