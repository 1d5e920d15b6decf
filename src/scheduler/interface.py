from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from simulation.queue import OrderedQueue


@dataclass(frozen=True)
class CarState:
    """Lightweight view of the car for scheduling decisions."""

    current_floor: int
    max_floor: int
    going_up: bool
    passengers: "OrderedQueue[int]"

    @property
    def is_empty(self) -> bool:
        return len(self.passengers) == 0


@dataclass(frozen=True)
class Stop:
    """Next floor to visit and the direction the car holds once there."""

    floor: int
    going_up: bool


class Scheduler(Protocol):
    """Strategy interface for choosing the car's next stop."""

    def select_stop(
        self,
        car: CarState,
        waiting: Sequence["OrderedQueue[int]"],
    ) -> Optional[Stop]:
        """
        Return the next stop, or None when no floor has work for the car.

        ``waiting`` is indexed by floor. Implementations must not mutate
        the car or the waiting queues.
        """
        ...


def travels(destination: int, floor: int, going_up: bool) -> bool:
    """True when a passenger at ``floor`` heads in the given direction."""
    if going_up:
        return destination > floor
    return destination < floor
