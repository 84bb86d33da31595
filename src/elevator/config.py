from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class ControllerConfig:
    """Building size and timings used by the controller and the view."""

    total_floors: int = 5
    door_dwell: float = 2.0
    departure_delay: float = 2.0
    seconds_per_floor: float = 0.5

    def __post_init__(self) -> None:
        if self.total_floors < 1:
            raise ValueError(f"total_floors must be at least 1, got {self.total_floors}")
        for name in ("door_dwell", "departure_delay", "seconds_per_floor"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ControllerConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
