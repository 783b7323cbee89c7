"""Tests for the presentation layer (headless surfaces)."""

import pygame
import pytest

from spike_platformer.assets import default_manifest, load_assets
from spike_platformer.controller import Key
from spike_platformer.render import (
    COLOR_BG,
    COLOR_HEALTH,
    COLOR_SPIKE,
    ShapeRenderer,
    SpriteRenderer,
    draw_health,
)

from conftest import FRAME_COLOR, TILE_COLOR


def _rgb(surface, pos):
    return tuple(surface.get_at(pos))[:3]


@pytest.fixture
def surface():
    return pygame.Surface((800, 600))


class TestHealthBar:
    def test_one_square_per_point(self, surface):
        surface.fill(COLOR_BG)
        draw_health(surface, 2)
        assert _rgb(surface, (25, 25)) == COLOR_HEALTH
        assert _rgb(surface, (60, 25)) == COLOR_HEALTH
        assert _rgb(surface, (95, 25)) == COLOR_BG

    def test_zero_health_draws_nothing(self, surface):
        surface.fill(COLOR_BG)
        draw_health(surface, 0)
        assert _rgb(surface, (25, 25)) == COLOR_BG


class TestShapeRenderer:
    def test_render(self, surface, world):
        ShapeRenderer().render(surface, world.level, world.frame())
        # Background above the floor
        assert _rgb(surface, (700, 100)) == COLOR_BG
        # Spike tip column at the bottom of column 7
        assert _rgb(surface, (300, 595)) == COLOR_SPIKE
        assert _rgb(surface, (25, 25)) == COLOR_HEALTH

    def test_player_drawn_at_position(self, surface, world):
        renderer = ShapeRenderer()
        renderer.render(surface, world.level, world.frame(), show_health=False)
        assert _rgb(surface, (120, 450)) != COLOR_BG


class TestSpriteRenderer:
    @pytest.fixture
    def renderer(self, asset_dir):
        manifest = default_manifest()
        return SpriteRenderer(load_assets(manifest, asset_dir), manifest.tiles)

    def test_render_level_and_player(self, surface, world, renderer):
        renderer.render(surface, world.level, world.frame())
        assert _rgb(surface, (110, 410)) == FRAME_COLOR
        assert _rgb(surface, (20, 580)) == TILE_COLOR
        assert _rgb(surface, (700, 100)) == COLOR_BG

    def test_flipped_frame_is_cached(self, surface, world, renderer):
        world.key_down(Key.LEFT)
        world.step()
        frame = world.frame()
        assert frame.flip
        renderer.render(surface, world.level, frame)
        renderer.render(surface, world.level, frame)
        assert list(renderer._flipped) == [frame.frame]
