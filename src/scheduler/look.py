from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from .interface import CarState, Stop, travels

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from simulation.queue import OrderedQueue

logger = logging.getLogger(__name__)


class LookScheduler:
    """Directional (LOOK) stop selection for a single car.

    1. Keep going in the current direction to the nearest floor where a
       rider gets off or where someone waits to travel the same way
    2. An empty car with nothing ahead reverses at the farthest floor
       holding a rider bound the other way
    3. Failing that, an empty car flips direction and repeats 1 and 2
    4. Otherwise there is no stop and the car heads home
    """

    def select_stop(
        self,
        car: CarState,
        waiting: Sequence["OrderedQueue[int]"],
    ) -> Optional[Stop]:
        stop = self._scan_ahead(car, waiting, car.going_up)
        if stop is not None:
            return stop

        # A loaded car never turns around mid-errand
        if not car.is_empty:
            return None

        stop = self._scan_reversal(car, waiting, car.going_up)
        if stop is not None:
            return stop

        flipped = not car.going_up
        stop = self._scan_ahead(car, waiting, flipped)
        if stop is None:
            stop = self._scan_reversal(car, waiting, flipped)
        return stop

    def _scan_ahead(
        self, car: CarState, waiting: Sequence["OrderedQueue[int]"], going_up: bool
    ) -> Optional[Stop]:
        for floor in self._floors_ahead(car, going_up):
            if floor in car.passengers:
                logger.debug("drop-off ahead at floor %s", floor)
                return Stop(floor, going_up)
            if waiting[floor].any(lambda dest: travels(dest, floor, going_up)):
                logger.debug("pickup ahead at floor %s", floor)
                return Stop(floor, going_up)
        return None

    def _scan_reversal(
        self, car: CarState, waiting: Sequence["OrderedQueue[int]"], going_up: bool
    ) -> Optional[Stop]:
        for floor in self._floors_for_reversal(car, going_up):
            if waiting[floor].any(
                lambda dest: not travels(dest, floor, going_up) and dest != floor
            ):
                logger.debug("reversing at floor %s", floor)
                return Stop(floor, not going_up)
        return None

    def _floors_ahead(self, car: CarState, going_up: bool) -> Iterable[int]:
        if going_up:
            return range(car.current_floor + 1, car.max_floor + 1)
        return range(car.current_floor - 1, -1, -1)

    def _floors_for_reversal(self, car: CarState, going_up: bool) -> Iterable[int]:
        # Farthest floor first, current floor included
        if going_up:
            return range(car.max_floor, car.current_floor - 1, -1)
        return range(0, car.current_floor + 1)
