"""Pure mapping from car state to what the browser draws."""

from __future__ import annotations

from typing import Dict, List, Optional

from elevator import ElevatorState

SHAFT_TRAVEL_PERCENT = 75


def car_bottom_percent(floor: int, total_floors: int) -> float:
    if total_floors <= 1:
        return 0.0
    return floor * SHAFT_TRAVEL_PERCENT / (total_floors - 1)


def door_transforms(is_open: bool) -> Dict[str, str]:
    if is_open:
        return {"left": "translateX(-100%)", "right": "translateX(100%)"}
    return {"left": "translateX(0)", "right": "translateX(0)"}


def call_buttons(total_floors: int) -> List[Dict[str, object]]:
    # Top floor first, labels are 1-based.
    return [
        {"floor": total_floors - i - 1, "label": f"Call elevator to floor {total_floors - i}"}
        for i in range(total_floors)
    ]


def render(state: ElevatorState, travel_duration: Optional[float]) -> dict:
    return {
        "car": {
            "bottom_percent": car_bottom_percent(state.current_floor, state.total_floors),
            "transition_seconds": travel_duration or 0.0,
        },
        "doors": door_transforms(state.is_doors_open),
        "buttons": call_buttons(state.total_floors),
    }
