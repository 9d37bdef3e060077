from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

import pygame

from .assets import get_text_surface
from .camera import Camera

if TYPE_CHECKING:  # pragma: no cover
    from orbit_demo.core.config import RenderCfg
    from orbit_demo.core.model import SatelliteSnapshot, SimSnapshot


def format_distance(distance_m: float) -> str:
    return f"Distance: {distance_m / 1000.0:,.2f} km"


def draw_earth(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
) -> None:
    if radius <= 0:
        return
    pygame.draw.circle(surface, color, position, radius)


def draw_satellite(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
) -> None:
    if radius <= 0:
        return
    pygame.draw.circle(surface, color, position, radius)


def draw_trail(
    surface: pygame.Surface,
    color: tuple[int, int, int] | tuple[int, int, int, int],
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)


def draw_distance_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    position: tuple[int, int],
    distance_m: float,
    *,
    render_cfg: RenderCfg,
) -> None:
    text_surf = get_text_surface(font, format_distance(distance_m), render_cfg.label_text_color)
    rect = text_surf.get_rect()
    rect.topleft = (position[0], position[1] + render_cfg.label_offset)
    surface.blit(text_surf, rect)


def draw_satellite_with_trail(
    surface: pygame.Surface,
    camera: Camera,
    sat: SatelliteSnapshot,
    font: pygame.font.Font,
    *,
    render_cfg: RenderCfg,
) -> None:
    draw_trail(
        surface,
        render_cfg.trail_color,
        camera.points_to_screen(sat.trail),
        render_cfg.trail_line_width,
    )
    screen_pos = camera.world_to_screen(*sat.position)
    draw_satellite(
        surface,
        screen_pos,
        render_cfg.satellite_pixel_radius,
        color=render_cfg.satellite_color,
    )
    draw_distance_label(surface, font, screen_pos, sat.distance, render_cfg=render_cfg)


def draw_scene(
    surface: pygame.Surface,
    camera: Camera,
    snapshot: SimSnapshot,
    font: pygame.font.Font,
    *,
    central_radius: float,
    render_cfg: RenderCfg,
) -> None:
    """Clear ``surface`` and draw the central body and every satellite."""

    surface.fill(render_cfg.background_color)
    draw_earth(
        surface,
        camera.origin,
        camera.length_to_pixels(central_radius),
        color=render_cfg.planet_color,
    )
    for sat in snapshot.satellites:
        draw_satellite_with_trail(surface, camera, sat, font, render_cfg=render_cfg)
