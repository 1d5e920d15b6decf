import pytest

from scheduler import CarState, LookScheduler, Stop, get_scheduler, travels
from simulation import OrderedQueue


def make_waiting(layout):
    return [OrderedQueue(floor) for floor in layout]


def make_car(floor, going_up=True, passengers=(), max_floor=5):
    return CarState(
        current_floor=floor,
        max_floor=max_floor,
        going_up=going_up,
        passengers=OrderedQueue(passengers),
    )


@pytest.fixture
def scheduler():
    return LookScheduler()


def test_travels():
    assert travels(5, 2, going_up=True)
    assert not travels(2, 2, going_up=True)
    assert travels(0, 2, going_up=False)
    assert not travels(3, 2, going_up=False)


def test_drop_off_ahead_beats_farther_pickup(scheduler):
    waiting = make_waiting([[], [], [], [], [5], []])
    car = make_car(1, passengers=[3])
    assert scheduler.select_stop(car, waiting) == Stop(3, True)


def test_pickup_ahead_beats_farther_drop_off(scheduler):
    waiting = make_waiting([[], [], [4], [], [], []])
    car = make_car(1, passengers=[5])
    assert scheduler.select_stop(car, waiting) == Stop(2, True)


def test_pickup_ahead_ignores_riders_bound_the_other_way(scheduler):
    waiting = make_waiting([[], [], [0], [], [5], []])
    car = make_car(1, passengers=[5])
    assert scheduler.select_stop(car, waiting) == Stop(4, True)


def test_scan_ahead_going_down(scheduler):
    waiting = make_waiting([[], [0], [], [], [], []])
    car = make_car(4, going_up=False, passengers=[2])
    assert scheduler.select_stop(car, waiting) == Stop(2, False)


def test_loaded_car_with_nothing_ahead_gets_no_stop(scheduler):
    waiting = make_waiting([[], [], [0], [], [], []])
    car = make_car(4, passengers=[1])
    assert scheduler.select_stop(car, waiting) is None


def test_empty_car_reverses_at_farthest_floor(scheduler):
    waiting = make_waiting([[], [], [0], [], [1], []])
    car = make_car(1)
    assert scheduler.select_stop(car, waiting) == Stop(4, False)


def test_reversal_on_current_floor_only_flips_direction(scheduler):
    waiting = make_waiting([[], [], [], [0], [], []])
    car = make_car(3)
    assert scheduler.select_stop(car, waiting) == Stop(3, False)


def test_reversal_ignores_self_trips(scheduler):
    waiting = make_waiting([[], [], [], [], [4], []])
    car = make_car(1)
    assert scheduler.select_stop(car, waiting) is None


def test_empty_car_flips_and_scans_behind(scheduler):
    waiting = make_waiting([[], [0], [], [], [], []])
    car = make_car(3)
    assert scheduler.select_stop(car, waiting) == Stop(1, False)


def test_empty_car_flips_and_reverses_behind(scheduler):
    # Nothing above floor 3 and nobody below heading down, so the car
    # turns around twice and ends up bound up from floor 1.
    waiting = make_waiting([[], [3], [], [], [], []])
    car = make_car(3)
    assert scheduler.select_stop(car, waiting) == Stop(1, True)


def test_down_reversal_scans_from_bottom(scheduler):
    waiting = make_waiting([[], [5], [], [4], [], []])
    car = make_car(3, going_up=False)
    assert scheduler.select_stop(car, waiting) == Stop(1, True)


def test_nothing_to_do(scheduler):
    waiting = make_waiting([[], [], []])
    car = make_car(1, max_floor=2)
    assert scheduler.select_stop(car, waiting) is None


def test_select_stop_does_not_mutate(scheduler):
    waiting = make_waiting([[], [2], [0]])
    car = make_car(0, passengers=[1], max_floor=2)
    scheduler.select_stop(car, waiting)
    assert [queue.to_list() for queue in waiting] == [[], [2], [0]]
    assert car.passengers.to_list() == [1]


def test_get_scheduler():
    assert isinstance(get_scheduler("LOOK"), LookScheduler)
    with pytest.raises(ValueError):
        get_scheduler("elevator-of-doom")
