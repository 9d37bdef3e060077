from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    disabled_color: Color
    text_color: tuple[int, int, int]
    radius: int


class Button:
    """Rectangular button with hover feedback and an optional enabled check."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        *,
        style: ButtonVisualStyle,
        enabled: Callable[[], bool] | None = None,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self._callback = callback
        self._enabled = enabled
        self._style = style

    def is_enabled(self) -> bool:
        return self._enabled is None or self._enabled()

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        mouse_pos: tuple[int, int] | None = None,
    ) -> None:
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        style = self._style
        if not self.is_enabled():
            color = style.disabled_color
        elif self.rect.collidepoint(mouse_pos):
            color = style.hover_color
        else:
            color = style.base_color
        pygame.draw.rect(surface, color, self.rect, border_radius=style.radius)
        text_surf = get_text_surface(font, self.text, style.text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Run the callback on a left click inside the button."""

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos) and self.is_enabled():
                self._callback()
                return True
        return False
