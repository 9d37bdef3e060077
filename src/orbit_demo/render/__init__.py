"""Rendering helpers for the orbit demo."""

from .camera import Camera
from .assets import get_text_surface, load_font
from .draw import (
    draw_distance_label,
    draw_earth,
    draw_satellite,
    draw_satellite_with_trail,
    draw_scene,
    draw_trail,
    format_distance,
)
from .ui import Button, ButtonVisualStyle

__all__ = [
    "Button",
    "ButtonVisualStyle",
    "Camera",
    "draw_distance_label",
    "draw_earth",
    "draw_satellite",
    "draw_satellite_with_trail",
    "draw_scene",
    "draw_trail",
    "format_distance",
    "get_text_surface",
    "load_font",
]
