from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, List, Optional, Sequence

from scheduler import CarState, Scheduler, Stop, get_scheduler, travels

from .config import HOME_FLOOR, LiftConstraints
from .errors import InvalidLayoutError
from .queue import OrderedQueue

logger = logging.getLogger(__name__)

UNPOSITIONED = -1


@dataclass(frozen=True)
class LiftSnapshot:
    """Self-contained view of the simulation after a floor change."""

    current_floor: int
    max_floor: int
    floor_history: List[int]
    active_passengers: List[int]
    delivered_passengers: List[List[int]]
    waiting_passengers: List[List[int]]

    def to_dict(self) -> dict:
        return asdict(self)


OnChange = Callable[[LiftSnapshot], None]


class LiftController:
    """Single car dispatch over a fixed waiting layout.

    The controller owns every passenger queue. ``run`` repeats drop-off,
    pickup and advance until nobody is waiting and the car is home, and
    hands ``on_change`` a fresh snapshot each time the car changes floor.
    """

    def __init__(
        self,
        layout: Sequence[Sequence[int]],
        capacity: int,
        on_change: Optional[OnChange] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        constraints = LiftConstraints(capacity=capacity)
        constraints.validate()
        self._validate_layout(layout)

        self.capacity = capacity
        self.max_floor = len(layout) - 1
        self.current_floor = UNPOSITIONED
        self.going_up = True
        self.floor_history: List[int] = []
        self.on_change = on_change
        self.scheduler = scheduler or get_scheduler(constraints.scheduler_name)

        self._passengers: OrderedQueue[int] = OrderedQueue()
        self._waiting = [OrderedQueue(self._without_self_trips(floor, dests)) for floor, dests in enumerate(layout)]
        self._delivered: List[OrderedQueue[int]] = [OrderedQueue() for _ in layout]

        logger.info(
            "lift created: floors=%s, capacity=%s, waiting=%s",
            len(layout), capacity, sum(len(queue) for queue in self._waiting),
        )

    def run(self) -> List[int]:
        self._update_current_floor(HOME_FLOOR)
        while not self.can_stop():
            self.move()
        # Riders bound for home get off once the car settles there
        self._put_down_passengers()
        logger.info("lift finished: stops=%s", len(self.floor_history))
        return list(self.floor_history)

    def move(self) -> None:
        self._put_down_passengers()
        self._pick_up_passengers()
        self._go_next_floor()

    def can_stop(self) -> bool:
        return self.current_floor == HOME_FLOOR and not self.has_waiting_passengers()

    def has_waiting_passengers(self) -> bool:
        return any(len(queue) for queue in self._waiting)

    def snapshot(self) -> LiftSnapshot:
        return LiftSnapshot(
            current_floor=self.current_floor,
            max_floor=self.max_floor,
            floor_history=list(self.floor_history),
            active_passengers=self._passengers.to_list(),
            delivered_passengers=[queue.to_list() for queue in self._delivered],
            waiting_passengers=[queue.to_list() for queue in self._waiting],
        )

    def _put_down_passengers(self) -> None:
        arrived = self._passengers.remove_all(self.current_floor)
        if arrived:
            self._delivered[self.current_floor].enqueue(*arrived)
            logger.debug("dropped off %s at floor %s", len(arrived), self.current_floor)

    def _pick_up_passengers(self) -> None:
        floor = self.current_floor
        waiting = self._waiting[floor]
        if floor == HOME_FLOOR:
            # Riders already at their destination never board
            waiting.remove_all(HOME_FLOOR)

        while len(self._passengers) < self.capacity:
            passenger = waiting.dequeue_matching(lambda dest: travels(dest, floor, self.going_up))
            if passenger is None:
                break
            self._passengers.enqueue(passenger)
            logger.debug("picked up rider for floor %s at floor %s", passenger, floor)

    def _go_next_floor(self) -> None:
        car = CarState(
            current_floor=self.current_floor,
            max_floor=self.max_floor,
            going_up=self.going_up,
            passengers=self._passengers,
        )
        stop = self.scheduler.select_stop(car, self._waiting)
        if stop is None:
            stop = Stop(HOME_FLOOR, going_up=False)
        self.going_up = stop.going_up
        self._update_current_floor(stop.floor)

    def _update_current_floor(self, floor: int) -> None:
        if floor == self.current_floor:
            return
        self.current_floor = floor
        self.floor_history.append(floor)
        if self.on_change is not None:
            self.on_change(self.snapshot())

    def _without_self_trips(self, floor: int, destinations: Sequence[int]) -> List[int]:
        if floor == HOME_FLOOR:
            return list(destinations)
        kept = [dest for dest in destinations if dest != floor]
        if len(kept) != len(destinations):
            logger.info(
                "discarded %s self-trip(s) waiting at floor %s",
                len(destinations) - len(kept), floor,
            )
        return kept

    @staticmethod
    def _validate_layout(layout: Sequence[Sequence[int]]) -> None:
        if not layout:
            raise InvalidLayoutError("layout must contain at least one floor")
        max_floor = len(layout) - 1
        for floor, destinations in enumerate(layout):
            for dest in destinations:
                if isinstance(dest, bool) or not isinstance(dest, int) or not 0 <= dest <= max_floor:
                    raise InvalidLayoutError(
                        f"floor {floor} has passenger for {dest!r}, expected a floor in 0-{max_floor}"
                    )


def run_lift(
    layout: Sequence[Sequence[int]],
    capacity: int,
    on_change: Optional[OnChange] = None,
) -> List[int]:
    """Run a full dispatch and return the floors the car stopped at."""
    return LiftController(layout, capacity, on_change).run()
