from __future__ import annotations

from typing import Iterable


class Camera:
    """Fixed linear mapping from world meters (Y-up) to screen pixels."""

    def __init__(self, size: tuple[int, int], ppm: float) -> None:
        if ppm <= 0.0:
            raise ValueError(f"pixels per meter must be positive, got {ppm}")
        self._size = size
        self._ppm = ppm

    @property
    def ppm(self) -> float:
        return self._ppm

    @property
    def origin(self) -> tuple[int, int]:
        width, height = self._size
        return width // 2, height // 2

    def world_to_screen(self, x: float, y: float) -> tuple[int, int]:
        ox, oy = self.origin
        return ox + int(round(x * self._ppm)), oy - int(round(y * self._ppm))

    def points_to_screen(
        self, points: Iterable[tuple[float, float]]
    ) -> list[tuple[int, int]]:
        return [self.world_to_screen(x, y) for x, y in points]

    def length_to_pixels(self, meters: float) -> int:
        return int(round(meters * self._ppm))
