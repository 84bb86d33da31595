"""HTTP and WebSocket front end for the LiftCar view."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
