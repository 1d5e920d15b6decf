"""CLI for running offline lift dispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from scheduler import get_scheduler
from simulation import DEMO_LAYOUT, LiftConstraints, LiftController, configure_logging


def build_controller(config: Dict, snapshots: List[Dict]) -> LiftController:
    defaults = LiftConstraints()
    layout = config.get("layout")
    if layout is None:
        layout = [list(floor) for floor in DEMO_LAYOUT]
    capacity = config.get("capacity", defaults.capacity)
    scheduler_name = config.get("scheduler", defaults.scheduler_name)

    return LiftController(
        layout,
        capacity,
        on_change=lambda snapshot: snapshots.append(snapshot.to_dict()),
        scheduler=get_scheduler(scheduler_name),
    )


def run_scenario(config: Dict) -> Tuple[List[int], List[Dict]]:
    snapshots: List[Dict] = []
    controller = build_controller(config, snapshots)
    history = controller.run()
    return history, snapshots


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the floor history and snapshots as JSON",
    )
    args = parser.parse_args(argv)

    configure_logging()
    config = json.loads(args.config.read_text())
    history, snapshots = run_scenario(config)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "capacity": config.get("capacity", LiftConstraints.capacity),
        "scheduler": config.get("scheduler", LiftConstraints.scheduler_name),
        "floor_history": history,
        "snapshots": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Scheduler: {results['scheduler']}")
    print(f"Capacity: {results['capacity']}")
    print(f"Stops: {len(history)}")
    print("Floor history: " + " -> ".join(str(floor) for floor in history))
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
