"""Physics helpers for the orbit demo.

Satellites move in the field of a single central body fixed at the origin;
they do not attract each other. All quantities are SI (m, m/s, m/s^2, s).
"""
from __future__ import annotations

import math

import numpy as np

from .config import PHYSICS_CFG, PhysicsCfg
from .vector import Vector2, freeze


def distance_from_center(position: Vector2) -> float:
    """Euclidean distance of ``position`` from the central body."""

    return math.hypot(position[0], position[1])


def acceleration(position: Vector2, cfg: PhysicsCfg = PHYSICS_CFG) -> Vector2:
    """Gravitational acceleration toward the origin at ``position``.

    ``-mu / r**3 * position`` is the usual ``-mu / r**2`` along ``-position / r``
    with the two divisions folded into one.

    ``position`` must not be the origin: at ``r == 0`` the result is NaN.
    """

    rmag = float(np.linalg.norm(position))
    return freeze(-cfg.mu * position / (rmag**3))


def rk4_step(
    position: Vector2,
    velocity: Vector2,
    dt: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> tuple[Vector2, Vector2]:
    """Advance ``(position, velocity)`` by one classical RK4 step of ``dt``.

    The inputs are left untouched; a new pair is returned.
    """

    a1 = acceleration(position, cfg)
    k1_r = velocity * dt
    k1_v = a1 * dt

    r2 = position + 0.5 * k1_r
    v2 = velocity + 0.5 * k1_v
    a2 = acceleration(r2, cfg)
    k2_r = v2 * dt
    k2_v = a2 * dt

    r3 = position + 0.5 * k2_r
    v3 = velocity + 0.5 * k2_v
    a3 = acceleration(r3, cfg)
    k3_r = v3 * dt
    k3_v = a3 * dt

    r4 = position + k3_r
    v4 = velocity + k3_v
    a4 = acceleration(r4, cfg)
    k4_r = v4 * dt
    k4_v = a4 * dt

    r_next = position + (k1_r + 2 * k2_r + 2 * k3_r + k4_r) / 6.0
    v_next = velocity + (k1_v + 2 * k2_v + 2 * k3_v + k4_v) / 6.0
    return freeze(r_next), freeze(v_next)


def energy_specific(
    position: Vector2, velocity: Vector2, cfg: PhysicsCfg = PHYSICS_CFG
) -> float:
    """Specific orbital energy ``v**2 / 2 - mu / r``."""

    rmag = distance_from_center(position)
    vmag2 = float(velocity[0] * velocity[0] + velocity[1] * velocity[1])
    return 0.5 * vmag2 - cfg.mu / rmag


def angular_momentum(position: Vector2, velocity: Vector2) -> float:
    """Specific angular momentum ``x * vy - y * vx``."""

    return float(position[0] * velocity[1] - position[1] * velocity[0])


__all__ = [
    "PHYSICS_CFG",
    "PhysicsCfg",
    "acceleration",
    "angular_momentum",
    "distance_from_center",
    "energy_specific",
    "rk4_step",
]
