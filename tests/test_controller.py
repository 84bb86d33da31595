"""Tests for the timed behaviour of the controller on a simulated clock."""

from __future__ import annotations

from typing import List, Tuple

import pytest

from elevator import (
    DEPARTURE_SLOT,
    DOOR_SLOT,
    ControllerConfig,
    Direction,
    ElevatorController,
    SimulatedClock,
)


def record(controller: ElevatorController) -> List[Tuple[float, str]]:
    events: List[Tuple[float, str]] = []
    controller.on_event("dispatch", lambda payload: events.append((payload["time"], payload["action"])))
    return events


def test_single_request_full_cycle(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.request_floor(3)
    assert controller.state.queue == (3,)
    assert controller.timers.active(DEPARTURE_SLOT)
    assert controller.travel_duration == 1.5

    clock.advance(2.0)
    state = controller.state
    assert state.current_floor == 3
    assert state.queue == ()
    assert state.direction is Direction.IDLE
    assert not state.is_doors_open

    clock.advance(1.0)
    assert not controller.state.is_doors_open
    clock.advance(0.5)
    assert controller.state.is_doors_open
    assert controller.timers.active(DOOR_SLOT)

    clock.advance(1.5)
    assert controller.state.is_doors_open
    clock.advance(0.5)
    assert not controller.state.is_doors_open
    assert controller.timers.active_slots() == []


def test_request_current_floor_opens_then_auto_closes(
    clock: SimulatedClock, controller: ElevatorController
) -> None:
    controller.request_floor(0)
    assert controller.state.is_doors_open
    assert controller.state.queue == ()
    assert not controller.timers.active(DEPARTURE_SLOT)

    clock.advance(1.0)
    assert controller.state.is_doors_open
    clock.advance(1.0)
    assert not controller.state.is_doors_open


def test_duplicate_requests_visit_floor_once(clock: SimulatedClock, controller: ElevatorController) -> None:
    events = record(controller)
    for floor in (2, 2, 4):
        controller.request_floor(floor)

    clock.advance(2.0)
    assert controller.state.current_floor == 2
    assert controller.state.queue == (4,)
    assert controller.state.direction is Direction.UP

    clock.run_until_idle()
    assert controller.state.current_floor == 4
    assert controller.state.direction is Direction.IDLE
    assert not controller.state.is_doors_open
    assert events == [
        (0.0, "request_floor"),
        (0.0, "request_floor"),
        (0.0, "request_floor"),
        (2.0, "move"),
        (3.0, "open_doors"),
        (5.0, "close_doors"),
        (7.0, "move"),
        (8.0, "open_doors"),
        (10.0, "close_doors"),
    ]


def test_new_request_restarts_departure_delay(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.request_floor(3)
    clock.advance(1.0)
    controller.request_floor(1)

    clock.advance(1.5)
    assert controller.state.current_floor == 0
    clock.advance(0.5)
    assert controller.state.current_floor == 3
    assert controller.state.direction is Direction.DOWN
    assert controller.state.queue == (1,)


def test_open_doors_hold_departure(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.open_doors()
    controller.request_floor(3)
    assert not controller.timers.active(DEPARTURE_SLOT)

    clock.advance(2.0)
    assert not controller.state.is_doors_open
    assert controller.timers.active(DEPARTURE_SLOT)
    assert controller.state.current_floor == 0

    clock.advance(2.0)
    assert controller.state.current_floor == 3


def test_door_timer_restarts_on_each_transition(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.open_doors()
    clock.advance(1.0)
    controller.close_doors()
    clock.advance(0.5)
    controller.open_doors()

    clock.advance(1.5)
    assert controller.state.is_doors_open
    clock.advance(0.5)
    assert not controller.state.is_doors_open


def test_reopening_open_doors_keeps_deadline(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.open_doors()
    clock.advance(1.0)
    controller.open_doors()
    clock.advance(1.0)
    assert not controller.state.is_doors_open


def test_arrival_is_not_cancelled_by_later_moves(clock: SimulatedClock) -> None:
    controller = ElevatorController(clock, ControllerConfig(seconds_per_floor=1.5))
    events = record(controller)
    controller.request_floor(4)
    controller.request_floor(0)

    clock.advance(4.0)
    assert controller.state.current_floor == 0
    assert controller.timers.deferred_count() == 2

    clock.advance(4.0)
    assert controller.state.is_doors_open
    clock.run_until_idle()
    assert not controller.state.is_doors_open
    assert [action for _, action in events].count("open_doors") == 2
    controller.close()


def test_travel_duration_measured_before_move(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.request_floor(4)
    controller.request_floor(3)
    clock.advance(2.0)
    # Post-move distance would be 0.5s; the arrival still uses the 2.0s leg.
    assert controller.travel_duration == 0.5
    clock.advance(1.5)
    assert not controller.state.is_doors_open
    clock.advance(0.5)
    assert controller.state.is_doors_open


def test_snapshot_reports_state_and_timers(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.request_floor(2)
    clock.advance(0.5)
    snapshot = controller.snapshot()
    assert snapshot == {
        "time": 0.5,
        "state": {
            "current_floor": 0,
            "direction": "idle",
            "queue": [2],
            "is_doors_open": False,
            "total_floors": 5,
        },
        "travel_duration": 1.0,
        "pending": [DEPARTURE_SLOT],
    }


def test_close_cancels_pending_timers(clock: SimulatedClock) -> None:
    controller = ElevatorController(clock)
    controller.request_floor(2)
    controller.close()
    clock.advance(10.0)
    assert controller.state.current_floor == 0
    assert clock.pending() == 0


def test_out_of_range_request_is_served_anyway(clock: SimulatedClock, controller: ElevatorController) -> None:
    controller.request_floor(7)
    clock.advance(2.0)
    assert controller.state.current_floor == 7
    assert controller.state.queue == ()


@pytest.mark.parametrize("floors", [1, 3, 10])
def test_total_floors_comes_from_config(clock: SimulatedClock, floors: int) -> None:
    controller = ElevatorController(clock, ControllerConfig(total_floors=floors))
    assert controller.state.total_floors == floors
