"""Immutable 2D vectors backed by numpy arrays."""
from __future__ import annotations

from typing import Iterable

import numpy as np


Vector2 = np.ndarray


def vec2(x: float, y: float) -> Vector2:
    """Return a read-only ``float64`` vector ``(x, y)``."""

    return freeze(np.array([x, y], dtype=np.float64))


def freeze(values: Iterable[float] | np.ndarray) -> Vector2:
    """Return ``values`` as a read-only 2-vector.

    Arrays that are already read-only ``float64`` 2-vectors are returned as-is;
    anything else is copied first so the caller's array is never locked.
    """

    if (
        isinstance(values, np.ndarray)
        and values.dtype == np.float64
        and values.shape == (2,)
        and not values.flags.writeable
    ):
        return values
    arr = np.array(values, dtype=np.float64)
    if arr.shape != (2,):
        raise ValueError(f"expected a 2-vector, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


def as_tuple(v: Vector2) -> tuple[float, float]:
    return float(v[0]), float(v[1])


__all__ = ["Vector2", "as_tuple", "freeze", "vec2"]
