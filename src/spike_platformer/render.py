"""Presentation layer.

Renderers read a LevelGrid and a RenderFrame and draw them onto a pygame
surface; they hold no simulation state. SpriteRenderer uses the loaded
images, ShapeRenderer draws flat coloured rectangles and needs no assets
(used for headless observations).
"""

from typing import Dict, Tuple

import pygame

from .animation import AnimationState
from .controller import RenderFrame
from .level import CellKind, LevelGrid


# Colors (RGB)
COLOR_BG = (50, 50, 50)
COLOR_HEALTH = (255, 0, 0)
COLOR_FLOOR = (120, 120, 130)
COLOR_SPIKE = (224, 108, 117)
COLOR_TEXT = (255, 255, 255)

# Shape-mode player colors per state
STATE_COLORS: Dict[AnimationState, Tuple[int, int, int]] = {
    AnimationState.IDLE: (97, 175, 239),
    AnimationState.RUN: (97, 175, 239),
    AnimationState.JUMP: (152, 195, 121),
    AnimationState.ATTACK: (229, 192, 123),
    AnimationState.HURT: (255, 160, 160),
    AnimationState.DEATH: (90, 90, 90),
}

# Health bar: one square per point
HEALTH_ORIGIN = (10, 10)
HEALTH_SQUARE = 30
HEALTH_SPACING = 35


def draw_health(surface: pygame.Surface, health: int) -> None:
    """Red squares along the top-left corner, one per health point."""
    x0, y0 = HEALTH_ORIGIN
    for i in range(health):
        pygame.draw.rect(
            surface, COLOR_HEALTH,
            (x0 + i * HEALTH_SPACING, y0, HEALTH_SQUARE, HEALTH_SQUARE),
        )


def draw_centered_text(surface: pygame.Surface, text: str, color: Tuple[int, int, int]) -> None:
    """Draw centered text on the surface."""
    font = pygame.font.Font(None, 48)
    text_surface = font.render(text, True, color)
    text_rect = text_surface.get_rect(center=(surface.get_width() // 2, surface.get_height() // 2))
    surface.blit(text_surface, text_rect)


class SpriteRenderer:
    """Draws the level and player with the loaded sprite images.

    Args:
        images: File name -> Surface, as returned by assets.load_assets().
        tiles: Logical tile name -> file name ("floor", "spike").
    """

    def __init__(self, images: Dict[str, pygame.Surface], tiles: Dict[str, str]):
        self.images = images
        self.floor_image = images[tiles["floor"]]
        self.spike_image = images[tiles["spike"]]
        self._scaled: Dict[Tuple[str, int], pygame.Surface] = {}
        self._flipped: Dict[str, pygame.Surface] = {}

    def _tile(self, name: str, image: pygame.Surface, size: int) -> pygame.Surface:
        key = (name, size)
        if key not in self._scaled:
            self._scaled[key] = pygame.transform.scale(image, (size, size))
        return self._scaled[key]

    def _sprite(self, frame: str, flip: bool) -> pygame.Surface:
        image = self.images[frame]
        if not flip:
            return image
        if frame not in self._flipped:
            self._flipped[frame] = pygame.transform.flip(image, True, False)
        return self._flipped[frame]

    def draw_level(self, surface: pygame.Surface, level: LevelGrid) -> None:
        size = level.tile_size
        floor = self._tile("floor", self.floor_image, size)
        spike = self._tile("spike", self.spike_image, size)
        for col, row, kind in level.cells_of():
            left, top, _, _ = level.cell_rect(col, row)
            # Spikes sit on top of a floor tile
            surface.blit(floor, (left, top))
            if kind is CellKind.SPIKE:
                surface.blit(spike, (left, top))

    def draw_player(self, surface: pygame.Surface, frame: RenderFrame) -> None:
        surface.blit(self._sprite(frame.frame, frame.flip), (frame.x, frame.y))

    def render(self, surface: pygame.Surface, level: LevelGrid, frame: RenderFrame) -> None:
        """Draw a complete frame (background, level, player, health)."""
        surface.fill(COLOR_BG)
        self.draw_level(surface, level)
        self.draw_player(surface, frame)
        draw_health(surface, frame.health)


class ShapeRenderer:
    """Flat-colour renderer that needs no image files."""

    def __init__(self, player_size: Tuple[int, int] = (40, 70)):
        self.player_size = player_size

    def draw_level(self, surface: pygame.Surface, level: LevelGrid) -> None:
        for col, row, kind in level.cells_of():
            rect = level.cell_rect(col, row)
            if kind is CellKind.SPIKE:
                left, top, w, h = rect
                pygame.draw.polygon(
                    surface, COLOR_SPIKE,
                    [(left, top + h), (left + w // 2, top), (left + w, top + h)],
                )
            else:
                pygame.draw.rect(surface, COLOR_FLOOR, rect)

    def draw_player(self, surface: pygame.Surface, frame: RenderFrame) -> None:
        w, h = self.player_size
        color = STATE_COLORS[frame.state]
        pygame.draw.rect(surface, color, (frame.x, frame.y, w, h))
        # Facing marker on the leading edge
        eye_x = frame.x + 4 if frame.flip else frame.x + w - 10
        pygame.draw.rect(surface, COLOR_TEXT, (eye_x, frame.y + 10, 6, 6))

    def render(
        self,
        surface: pygame.Surface,
        level: LevelGrid,
        frame: RenderFrame,
        show_health: bool = True,
    ) -> None:
        surface.fill(COLOR_BG)
        self.draw_level(surface, level)
        self.draw_player(surface, frame)
        if show_health:
            draw_health(surface, frame.health)
