from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    IDLE = "idle"


@dataclass(frozen=True)
class ElevatorState:
    """Snapshot of the car. Transitions replace it, never mutate it."""

    current_floor: int = 0
    direction: Direction = Direction.IDLE
    queue: Tuple[int, ...] = field(default_factory=tuple)
    is_doors_open: bool = False
    total_floors: int = 5

    @property
    def target_floor(self) -> Optional[int]:
        return self.queue[0] if self.queue else None

    def as_dict(self) -> dict:
        return {
            "current_floor": self.current_floor,
            "direction": self.direction.value,
            "queue": list(self.queue),
            "is_doors_open": self.is_doors_open,
            "total_floors": self.total_floors,
        }


def initial_state(total_floors: int = 5) -> ElevatorState:
    return ElevatorState(total_floors=total_floors)
