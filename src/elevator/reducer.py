"""Actions and the pure transition function for the car."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Optional, Union

from .state import Direction, ElevatorState


@dataclass(frozen=True)
class RequestFloor:
    name: ClassVar[str] = "request_floor"

    floor: int


@dataclass(frozen=True)
class Move:
    name: ClassVar[str] = "move"


@dataclass(frozen=True)
class OpenDoors:
    name: ClassVar[str] = "open_doors"


@dataclass(frozen=True)
class CloseDoors:
    name: ClassVar[str] = "close_doors"


Action = Union[RequestFloor, Move, OpenDoors, CloseDoors]


def reduce(state: ElevatorState, action: Action) -> ElevatorState:
    if isinstance(action, RequestFloor):
        if (
            action.floor == state.current_floor
            and not state.is_doors_open
            and state.direction is Direction.IDLE
            and not state.queue
        ):
            return replace(state, is_doors_open=True)
        # No dedup or bounds check here; duplicates collapse on arrival.
        return replace(state, queue=state.queue + (action.floor,))

    if isinstance(action, Move):
        if not state.queue:
            return replace(state, direction=Direction.IDLE)
        next_floor = state.queue[0]
        new_queue = tuple(floor for floor in state.queue[1:] if floor != next_floor)
        return replace(
            state,
            current_floor=next_floor,
            direction=_direction_after(next_floor, new_queue),
            queue=new_queue,
            is_doors_open=False,
        )

    if isinstance(action, OpenDoors):
        return replace(state, is_doors_open=True)

    if isinstance(action, CloseDoors):
        return replace(state, is_doors_open=False)

    return state


def _direction_after(arrived_at: int, queue: tuple) -> Direction:
    if not queue:
        return Direction.IDLE
    # A head equal to the floor just reached counts as down.
    return Direction.UP if queue[0] > arrived_at else Direction.DOWN


def travel_duration(state: ElevatorState, seconds_per_floor: float = 0.5) -> Optional[float]:
    """Seconds needed to reach the head of the queue from the current floor.

    Returns ``None`` when nothing is queued.
    """

    target = state.target_floor
    if target is None:
        return None
    return abs(state.current_floor - target) * seconds_per_floor
