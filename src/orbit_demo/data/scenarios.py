"""Initial satellite configuration restored by every reset."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from orbit_demo.core.vector import Vector2, vec2


@dataclass(frozen=True)
class SatelliteSpec:
    position: tuple[float, float]
    velocity: tuple[float, float]

    def __post_init__(self) -> None:
        if not np.all(np.isfinite([*self.position, *self.velocity])):
            raise ValueError(f"non-finite initial state: {self}")
        if tuple(self.position) == (0.0, 0.0):
            raise ValueError("a satellite cannot start at the central body")

    def position_vector(self) -> Vector2:
        return vec2(*self.position)

    def velocity_vector(self) -> Vector2:
        return vec2(*self.velocity)


# Three roughly circular orbits at different altitudes and speeds.
INITIAL_SATELLITES: tuple[SatelliteSpec, ...] = (
    SatelliteSpec(position=(0.0, 1.0e7), velocity=(7.8e3, 0.0)),
    SatelliteSpec(position=(1.5e7, 0.0), velocity=(0.0, 7.0e3)),
    SatelliteSpec(position=(0.0, 1.5e7), velocity=(6.5e3, 0.0)),
)


__all__ = ["INITIAL_SATELLITES", "SatelliteSpec"]
