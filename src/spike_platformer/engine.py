"""Game engine: pygame window, input and the fixed-rate loop.

Loads the sprite sheet, builds the World and runs
events -> tick -> render once per frame at config.fps.
"""

import pygame
from typing import Optional, Dict, Any, Set

from .config import GameConfig, HorizontalModel
from .controller import Key
from .world import World
from .assets import AssetLoadError, AssetManifest, default_manifest, load_assets
from .animation import default_animations
from .render import SpriteRenderer, draw_centered_text


# Physical key -> logical key
KEY_BINDINGS: Dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_a: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_d: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_w: Key.UP,
    pygame.K_SPACE: Key.SPACE,
}

# Key repeat (delay ms, interval ms) for the STEP movement model
KEY_REPEAT = (250, 33)

COLOR_GAME_OVER = (224, 108, 117)


class PlatformerEngine:
    """Main game engine coordinating all systems.

    Handles:
    - Asset loading (fails before any window content is drawn)
    - Keyboard input
    - Game loop with fixed timestep
    - Pygame rendering
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        manifest: Optional[AssetManifest] = None,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            manifest: Sprite files to load. Stock sprite sheet if None.

        Raises:
            AssetLoadError: If any sprite file is missing or unreadable.
        """
        self.config = config or GameConfig()
        self.manifest = manifest or default_manifest()

        # Initialize pygame
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption(self.config.title)
        self.clock = pygame.time.Clock()

        if self.config.controller.horizontal_model == HorizontalModel.STEP:
            pygame.key.set_repeat(*KEY_REPEAT)

        # Fail fast: nothing below runs with a partial sprite sheet
        try:
            self.images = load_assets(self.manifest, self.config.asset_dir)
        except AssetLoadError:
            pygame.quit()
            raise
        self.renderer = SpriteRenderer(self.images, self.manifest.tiles)

        animations = default_animations(
            self.manifest.frames, delay=self.config.controller.frame_delay
        )
        self.world = World(self.config, animations=animations)

        # Physical keys currently down, per logical key
        self._pressed: Dict[Key, Set[int]] = {key: set() for key in Key}

        self.running = False

    def reset(self) -> None:
        """Respawn the player with full health."""
        self.world.reset()
        print(f"NEW GAME: health={self.world.player.health} "
              f"spawn=({self.world.player.x}, {self.world.player.y})")

    def process_event(self, event: pygame.event.Event) -> None:
        """Apply a single pygame event."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_r:
                self.reset()
            elif event.key in KEY_BINDINGS:
                self._press(event.key)
        elif event.type == pygame.KEYUP:
            if event.key in KEY_BINDINGS:
                self._release(event.key)

    def _press(self, physical: int) -> None:
        key = KEY_BINDINGS[physical]
        pressed = self._pressed[key]
        # A second binding of an already held key is not a new press;
        # OS repeats of the held binding still are.
        if pressed and physical not in pressed:
            pressed.add(physical)
            return
        pressed.add(physical)
        self.world.key_down(key)

    def _release(self, physical: int) -> None:
        key = KEY_BINDINGS[physical]
        pressed = self._pressed[key]
        pressed.discard(physical)
        if not pressed:
            self.world.key_up(key)

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            self.process_event(event)

    def update(self) -> None:
        """Advance the world one tick and report notable events."""
        for event in self.world.step():
            p = self.world.player
            if event == "hurt":
                print(f"HURT: health={p.health} at ({p.x}, {p.y})")
            elif event == "died":
                print(f"DIED: after {self.world.controller.ticks} ticks at ({p.x}, {p.y})")

    def render(self) -> None:
        """Render current game state."""
        self.renderer.render(self.screen, self.world.level, self.world.frame())
        if self.world.game_over:
            draw_centered_text(self.screen, "GAME OVER! Press R to restart", COLOR_GAME_OVER)
        pygame.display.flip()

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        while self.running:
            self.handle_events()
            self.update()
            self.render()
            self.clock.tick(self.config.fps)
        pygame.quit()

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for observation/logging."""
        return self.world.get_state()
