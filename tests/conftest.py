"""
Shared pytest fixtures for LiftCar tests.
"""

import logging

import pytest

from elevator import ControllerConfig, ElevatorController, SimulatedClock


@pytest.fixture
def clock() -> SimulatedClock:
    return SimulatedClock()


@pytest.fixture
def controller(clock) -> ElevatorController:
    controller = ElevatorController(clock, ControllerConfig())
    yield controller
    controller.close()


@pytest.fixture(autouse=True)
def reset_liftcar_logging():
    """Start each test with silent package loggers at the default level."""
    for name in ("elevator", "server"):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
    yield
