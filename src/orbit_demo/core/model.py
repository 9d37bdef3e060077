"""Data models for the orbit demo state."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from .config import PHYSICS_CFG
from .physics import distance_from_center
from .vector import Vector2, as_tuple, vec2


Point = tuple[float, float]


@dataclass
class Satellite:
    """Mutable state for one simulated satellite.

    ``trail`` holds past positions, oldest first. Its ``maxlen`` makes the
    deque drop the oldest entry once the cap is reached.
    """

    position: Vector2 = field(default_factory=lambda: vec2(0.0, 0.0))
    velocity: Vector2 = field(default_factory=lambda: vec2(0.0, 0.0))
    trail: deque[Vector2] = field(
        default_factory=lambda: deque(maxlen=PHYSICS_CFG.trail_length)
    )
    label: int = 0

    def add_trail_point(self) -> None:
        """Append the current position to the trail."""
        self.trail.append(self.position)

    def snapshot(self) -> "SatelliteSnapshot":
        return SatelliteSnapshot(
            label=self.label,
            position=as_tuple(self.position),
            velocity=as_tuple(self.velocity),
            trail=tuple(as_tuple(point) for point in self.trail),
            distance=distance_from_center(self.position),
        )


@dataclass
class SimState:
    """Simulation state owned by a single controller."""

    satellites: list[Satellite] = field(default_factory=list)
    running: bool = False
    time: float = 0.0
    frame: int = 0

    def snapshot(self) -> "SimSnapshot":
        return SimSnapshot(
            satellites=tuple(sat.snapshot() for sat in self.satellites),
            running=self.running,
            time=self.time,
            frame=self.frame,
        )


@dataclass(frozen=True)
class SatelliteSnapshot:
    label: int
    position: Point
    velocity: Point
    trail: tuple[Point, ...]
    distance: float


@dataclass(frozen=True)
class SimSnapshot:
    """Read-only view of a :class:`SimState` handed to renderers."""

    satellites: tuple[SatelliteSnapshot, ...]
    running: bool
    time: float
    frame: int


__all__ = ["Point", "Satellite", "SatelliteSnapshot", "SimSnapshot", "SimState"]
