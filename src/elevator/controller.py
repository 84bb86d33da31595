from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .config import ControllerConfig
from .reducer import Action, CloseDoors, Move, OpenDoors, RequestFloor, reduce, travel_duration
from .state import ElevatorState, initial_state
from .timers import TimerSlots, TimerSource

logger = logging.getLogger(__name__)

DOOR_SLOT = "doors"
DEPARTURE_SLOT = "departure"

_UNSET = object()


class ElevatorController:
    """Owns the car state and the two timers that keep it moving.

    Every action goes through :func:`reduce`. After each transition the door
    and departure timers are re-armed, but only when the state they depend on
    actually changed, so an untouched timer keeps its original deadline.
    """

    def __init__(self, clock: TimerSource, config: Optional[ControllerConfig] = None) -> None:
        self.config = config or ControllerConfig()
        self.timers = TimerSlots(clock)
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._state = initial_state(self.config.total_floors)
        self._door_deps: object = _UNSET
        self._departure_deps: object = _UNSET
        self._sync_timers()

    @property
    def state(self) -> ElevatorState:
        return self._state

    @property
    def travel_duration(self) -> Optional[float]:
        return travel_duration(self._state, self.config.seconds_per_floor)

    def now(self) -> float:
        return self.timers.source.time()

    def request_floor(self, floor: int) -> ElevatorState:
        return self.dispatch(RequestFloor(floor))

    def move(self) -> ElevatorState:
        return self.dispatch(Move())

    def open_doors(self) -> ElevatorState:
        return self.dispatch(OpenDoors())

    def close_doors(self) -> ElevatorState:
        return self.dispatch(CloseDoors())

    def dispatch(self, action: Action) -> ElevatorState:
        self._state = reduce(self._state, action)
        logger.debug("%s -> floor=%s queue=%s doors_open=%s direction=%s",
                     action, self._state.current_floor, list(self._state.queue),
                     self._state.is_doors_open, self._state.direction.value)
        self._sync_timers()
        self._emit("dispatch", {"time": self.now(), "action": action.name, "state": self._state.as_dict()})
        return self._state

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def snapshot(self) -> dict:
        return {
            "time": self.now(),
            "state": self._state.as_dict(),
            "travel_duration": self.travel_duration,
            "pending": self.timers.active_slots(),
        }

    def close(self) -> None:
        self.timers.close()
        self.event_hooks.clear()

    def _sync_timers(self) -> None:
        state = self._state

        door_deps = state.is_doors_open
        if door_deps != self._door_deps:
            self._door_deps = door_deps
            self.timers.cancel(DOOR_SLOT)
            if state.is_doors_open:
                self.timers.schedule(DOOR_SLOT, self.config.door_dwell, self.close_doors)

        duration = self.travel_duration
        departure_deps: Tuple[object, ...] = (state.queue, state.is_doors_open, duration)
        if departure_deps != self._departure_deps:
            self._departure_deps = departure_deps
            self.timers.cancel(DEPARTURE_SLOT)
            if state.queue and not state.is_doors_open:
                self.timers.schedule(
                    DEPARTURE_SLOT,
                    self.config.departure_delay,
                    lambda: self._depart(duration),
                )

    def _depart(self, duration: float) -> None:
        # Duration was measured before the move; arm the arrival first so it
        # precedes the next departure on equal deadlines.
        self.timers.defer(duration, self.open_doors)
        self.move()

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
