"""Single-car elevator state machine for LiftCar."""

import logging

from .config import ControllerConfig
from .controller import DEPARTURE_SLOT, DOOR_SLOT, ElevatorController
from .reducer import Action, CloseDoors, Move, OpenDoors, RequestFloor, reduce, travel_duration
from .state import Direction, ElevatorState, initial_state
from .timers import SimulatedClock, TimerSlots, TimerSource

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Action",
    "CloseDoors",
    "ControllerConfig",
    "DEPARTURE_SLOT",
    "DOOR_SLOT",
    "Direction",
    "ElevatorController",
    "ElevatorState",
    "Move",
    "OpenDoors",
    "RequestFloor",
    "SimulatedClock",
    "TimerSlots",
    "TimerSource",
    "initial_state",
    "reduce",
    "travel_duration",
]
