"""Fixed-step simulation loop driving the satellites."""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Iterable, Sequence

from orbit_demo.data.scenarios import INITIAL_SATELLITES, SatelliteSpec

from .config import PHYSICS_CFG, PhysicsCfg
from .model import Satellite, SimSnapshot, SimState
from .physics import distance_from_center, rk4_step


logger = logging.getLogger(__name__)

Listener = Callable[[str, dict], None]


def farthest_index(satellites: Sequence[Satellite]) -> int:
    """Index of the satellite farthest from the origin.

    Exact ties go to the lowest index. Returns ``-1`` for an empty sequence.
    """

    best_index = -1
    best_distance = -1.0
    for index, sat in enumerate(satellites):
        distance = distance_from_center(sat.position)
        if distance > best_distance:
            best_distance = distance
            best_index = index
    return best_index


class SimulationController:
    """Owns a :class:`SimState` and advances it one frame at a time.

    The presentation layer calls :meth:`reset` at startup, :meth:`start` on a
    start action and then :meth:`step` once per animation frame. Each call runs
    to completion; nothing here is shared between controller instances.
    """

    def __init__(
        self,
        cfg: PhysicsCfg = PHYSICS_CFG,
        initial: Iterable[SatelliteSpec] = INITIAL_SATELLITES,
    ) -> None:
        self.cfg = cfg
        self._initial = tuple(initial)
        self._state = SimState()
        self._listeners: list[Listener] = []
        self._load_initial()

    @property
    def state(self) -> SimState:
        return self._state

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def is_running(self) -> bool:
        return self._state.running

    def snapshot(self) -> SimSnapshot:
        return self._state.snapshot()

    def reset(self) -> SimSnapshot:
        self._load_initial()
        logger.info("Simulation reset (%d satellites)", len(self._state.satellites))
        self._emit("reset", {"count": len(self._state.satellites)})
        return self.snapshot()

    def start(self) -> None:
        if self._state.running:
            return
        self._state.running = True
        logger.info("Simulation started")
        self._emit("start", {"count": len(self._state.satellites)})

    def step(self) -> SimSnapshot:
        state = self._state
        if not state.running:
            return state.snapshot()

        cfg = self.cfg
        for _ in range(cfg.steps_per_frame):
            self._substep()
            self.prune_farthest()
        state.frame += 1

        if logger.isEnabledFor(logging.DEBUG):
            for sat in state.satellites:
                logger.debug(
                    "Satellite %d: (%.2f, %.2f) m",
                    sat.label,
                    sat.position[0],
                    sat.position[1],
                )
        return state.snapshot()

    def prune_farthest(self) -> Satellite | None:
        """Remove and return the satellite farthest from the central body.

        Does nothing and returns ``None`` once the count is at or below
        ``cfg.min_satellites``.
        """

        satellites = self._state.satellites
        if len(satellites) <= self.cfg.min_satellites:
            return None
        index = farthest_index(satellites)
        if index < 0:
            return None
        removed = satellites.pop(index)
        distance = distance_from_center(removed.position)
        logger.info(
            "Removed farthest satellite %d at %.2f km, %d remaining",
            removed.label,
            distance / 1000.0,
            len(satellites),
        )
        self._emit(
            "prune",
            {"label": removed.label, "distance": distance, "count": len(satellites)},
        )
        return removed

    def _substep(self) -> None:
        cfg = self.cfg
        for sat in self._state.satellites:
            sat.position, sat.velocity = rk4_step(sat.position, sat.velocity, cfg.dt, cfg)
            sat.add_trail_point()
        self._state.time += cfg.dt

    def _load_initial(self) -> None:
        self._state.satellites = [
            Satellite(
                position=spec.position_vector(),
                velocity=spec.velocity_vector(),
                trail=deque(maxlen=self.cfg.trail_length),
                label=number,
            )
            for number, spec in enumerate(self._initial, start=1)
        ]
        self._state.running = False
        self._state.time = 0.0
        self._state.frame = 0

    def _emit(self, event_type: str, details: dict) -> None:
        details = {"time": self._state.time, **details}
        for listener in self._listeners:
            listener(event_type, details)


__all__ = ["Listener", "SimulationController", "farthest_index"]
