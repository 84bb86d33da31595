"""CLI for replaying LiftCar call-button scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional

from elevator import ControllerConfig, ElevatorController, SimulatedClock
from elevator.logging_config import configure_from_env


def build_controller(config: Dict) -> ElevatorController:
    controller_config = ControllerConfig.from_dict(config.get("config", {}))
    return ElevatorController(SimulatedClock(), controller_config)


def _schedule_requests(controller: ElevatorController, requests: List[Dict]) -> None:
    clock = controller.timers.source
    for request in requests:
        floor = request.get("floor")
        if floor is None:
            continue
        clock.call_later(request.get("time", 0.0), controller.request_floor, floor)


def run_scenario(controller: ElevatorController, config: Dict) -> List[Dict]:
    duration = config.get("duration", 30.0)
    timeline: List[Dict] = []
    controller.on_event("dispatch", timeline.append)

    _schedule_requests(controller, config.get("requests", []))
    controller.timers.source.advance(duration)
    return timeline


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the dispatch timeline as JSON",
    )
    args = parser.parse_args()
    configure_from_env()

    config = json.loads(args.config.read_text())
    controller = build_controller(config)
    timeline = run_scenario(controller, config)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 30.0),
        "final_state": controller.state.as_dict(),
        "timeline": timeline,
    }
    controller.close()

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']}s")
    print("Timeline:")
    for entry in timeline:
        state = entry["state"]
        print(
            f"  t={entry['time']:6.2f}  {entry['action']:<13} floor={state['current_floor']} "
            f"doors={'open' if state['is_doors_open'] else 'closed'} "
            f"direction={state['direction']} queue={state['queue']}"
        )
    print("Final state:")
    for key, value in results["final_state"].items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved timeline to {args.output}")


if __name__ == "__main__":
    main()
