"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pygame
import pytest

from spike_platformer.assets import default_manifest
from spike_platformer.config import ControllerConfig, GameConfig
from spike_platformer.controller import CharacterController
from spike_platformer.world import World


# Solid fill colours for generated test sprites
TILE_COLOR = (0, 0, 200)
FRAME_COLOR = (0, 200, 0)


@pytest.fixture
def controller():
    """Fresh controller with default tuning."""
    return CharacterController(ControllerConfig())


@pytest.fixture
def grounded(controller):
    """Controller whose player already stands on the floor."""
    controller.player.y = controller.config.floor_y
    return controller


@pytest.fixture
def world():
    """Default world (spikes hurt)."""
    return World(GameConfig())


@pytest.fixture
def asset_dir(tmp_path):
    """Directory holding a solid-colour PNG for every stock sprite file."""
    manifest = default_manifest()
    tile_names = set(manifest.tiles.values())
    for name in manifest.filenames():
        surface = pygame.Surface((40, 70))
        surface.fill(TILE_COLOR if name in tile_names else FRAME_COLOR)
        pygame.image.save(surface, str(tmp_path / name))
    return tmp_path
