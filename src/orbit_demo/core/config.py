"""Configuration dataclasses for the orbit demo."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PhysicsCfg:
    gravitational_constant: float = 6.67430e-11
    central_mass: float = 5.972e24
    central_radius: float = 6_371_000.0
    dt: float = 10.0
    steps_per_frame: int = 10
    trail_length: int = 1000
    min_satellites: int = 2

    def __post_init__(self) -> None:
        if self.dt <= 0.0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.steps_per_frame <= 0:
            raise ValueError(f"steps_per_frame must be positive, got {self.steps_per_frame}")
        if self.trail_length <= 0:
            raise ValueError(f"trail_length must be positive, got {self.trail_length}")
        if self.min_satellites < 0:
            raise ValueError(f"min_satellites must be >= 0, got {self.min_satellites}")

    @property
    def mu(self) -> float:
        return self.gravitational_constant * self.central_mass


@dataclass(frozen=True)
class RenderCfg:
    width: int = 800
    height: int = 800
    fps: int = 60
    pixels_per_meter: float = 1e-5
    background_color: tuple[int, int, int] = (255, 255, 255)
    planet_color: tuple[int, int, int] = (52, 152, 219)
    satellite_color: tuple[int, int, int] = (46, 204, 113)
    satellite_pixel_radius: int = 8
    trail_color: tuple[int, int, int] = (31, 140, 215)
    trail_line_width: int = 2
    label_text_color: tuple[int, int, int] = (0, 0, 0)
    label_font_size: int = 12
    label_offset: int = 15
    font_names: tuple[str, ...] = ("arial", "dejavusans", "freesans")
    button_font_size: int = 18
    button_size: tuple[int, int] = (120, 40)
    button_margin: int = 16
    button_color: tuple[int, int, int] = (52, 73, 94)
    button_hover_color: tuple[int, int, int] = (72, 101, 129)
    button_disabled_color: tuple[int, int, int] = (170, 178, 186)
    button_text_color: tuple[int, int, int] = (255, 255, 255)
    button_radius: int = 8


PHYSICS_CFG = PhysicsCfg()
RENDER_CFG = RenderCfg()


__all__ = ["PHYSICS_CFG", "RENDER_CFG", "PhysicsCfg", "RenderCfg"]
