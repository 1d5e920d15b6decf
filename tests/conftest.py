from typing import List

import pytest

from simulation import DEMO_LAYOUT, LiftSnapshot


class SnapshotRecorder:
    """Callback collecting every snapshot handed out by a controller."""

    def __init__(self) -> None:
        self.snapshots: List[LiftSnapshot] = []

    def __call__(self, snapshot: LiftSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def floors(self) -> List[int]:
        return [snapshot.current_floor for snapshot in self.snapshots]


@pytest.fixture
def recorder() -> SnapshotRecorder:
    return SnapshotRecorder()


@pytest.fixture
def demo_layout() -> List[List[int]]:
    return [list(floor) for floor in DEMO_LAYOUT]
