"""Tests for game engine."""

import os
import pytest

# Use dummy video driver for headless testing
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pygame

from spike_platformer.animation import AnimationState
from spike_platformer.assets import AssetLoadError
from spike_platformer.config import ControllerConfig, GameConfig, HorizontalModel
from spike_platformer.engine import PlatformerEngine


def _key(event_type, key):
    return pygame.event.Event(event_type, key=key)


@pytest.fixture
def engine(asset_dir):
    return PlatformerEngine(GameConfig(asset_dir=str(asset_dir)))


class TestPlatformerEngine:
    def test_initialization(self, engine):
        assert engine.world is not None
        assert len(engine.images) == 22
        assert not engine.running

    def test_missing_assets_fail_fast(self, tmp_path):
        with pytest.raises(AssetLoadError):
            PlatformerEngine(GameConfig(asset_dir=str(tmp_path)))

    def test_missing_assets_shut_down_pygame(self, tmp_path):
        with pytest.raises(AssetLoadError):
            PlatformerEngine(GameConfig(asset_dir=str(tmp_path)))
        assert not pygame.display.get_init()

    def test_arrow_keys_drive_player(self, engine):
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_RIGHT))
        assert engine.world.player.vx == 5
        engine.update()
        assert engine.world.player.x == 105
        engine.process_event(_key(pygame.KEYUP, pygame.K_RIGHT))
        assert engine.world.player.vx == 0

    def test_wasd_bindings(self, engine):
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_a))
        assert not engine.world.player.facing_right
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_w))
        assert engine.world.player.jumping

    def test_releasing_one_binding_keeps_other_held(self, engine):
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_LEFT))
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_a))
        engine.process_event(_key(pygame.KEYUP, pygame.K_a))
        assert engine.world.player.vx == -5
        assert engine.world.controller.state == AnimationState.RUN
        engine.process_event(_key(pygame.KEYUP, pygame.K_LEFT))
        assert engine.world.player.vx == 0
        assert engine.world.controller.state == AnimationState.IDLE

    def test_second_binding_is_not_a_new_step(self, asset_dir):
        config = GameConfig(
            controller=ControllerConfig(horizontal_model=HorizontalModel.STEP),
            asset_dir=str(asset_dir),
        )
        engine = PlatformerEngine(config)
        pygame.key.set_repeat()
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_RIGHT))
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_d))
        assert engine.world.player.x == 105
        # OS repeat of the held arrow still steps
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_RIGHT))
        assert engine.world.player.x == 110

    def test_space_attacks(self, engine):
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_SPACE))
        assert engine.world.controller.state == AnimationState.ATTACK

    def test_unbound_key_ignored(self, engine):
        before = engine.get_state()
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_q))
        assert engine.get_state() == before

    def test_escape_stops(self, engine):
        engine.running = True
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_ESCAPE))
        assert not engine.running

    def test_quit_event_stops(self, engine):
        engine.running = True
        engine.process_event(pygame.event.Event(pygame.QUIT))
        assert not engine.running

    def test_r_resets(self, engine):
        engine.world.controller.kill()
        engine.process_event(_key(pygame.KEYDOWN, pygame.K_r))
        assert engine.world.player.alive
        assert engine.world.controller.state == AnimationState.IDLE

    def test_render_runs(self, engine):
        for _ in range(5):
            engine.update()
            engine.render()

    def test_render_game_over(self, engine):
        engine.world.controller.kill()
        engine.update()
        engine.render()

    def test_step_model_enables_key_repeat(self, asset_dir):
        config = GameConfig(
            controller=ControllerConfig(horizontal_model=HorizontalModel.STEP),
            asset_dir=str(asset_dir),
        )
        PlatformerEngine(config)
        assert pygame.key.get_repeat() == (250, 33)
        pygame.key.set_repeat()

    def test_get_state(self, engine):
        state = engine.get_state()
        assert state["position"] == (100, 400)
        assert state["health"] == 3
