"""The scene: one controlled player on a static tile grid.

World owns the level grid and the spike collision index, and runs the
controller tick followed by the spike check. Everything here is headless;
engine.py and gym_env.py drive it.
"""

from typing import Any, Dict, List, Optional

from .config import GameConfig
from .controller import CharacterController, Key, RenderFrame
from .level import LevelGrid, build_default_level
from .physics import CollisionWorld
from .animation import AnimationSet


class World:
    """Controller + level + hazards, advanced one tick at a time."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        level: Optional[LevelGrid] = None,
        animations: Optional[AnimationSet] = None,
    ):
        """Build the scene.

        Args:
            config: Game configuration. Uses defaults if None.
            level: Tile grid. Built from config.level if None.
            animations: Frame sequences. Stock sprite sheet if None.
        """
        self.config = config or GameConfig()
        self.level = level or build_default_level(self.config.level)
        self.collisions = CollisionWorld.from_level(self.level)
        self.controller = CharacterController(self.config.controller, animations)

        self.hits_taken = 0

    @property
    def player(self):
        return self.controller.player

    @property
    def game_over(self) -> bool:
        return not self.controller.player.alive

    def reset(self) -> None:
        self.controller.reset()
        self.hits_taken = 0

    def key_down(self, key: Key) -> None:
        self.controller.on_key_down(key)

    def key_up(self, key: Key) -> None:
        self.controller.on_key_up(key)

    def touching_spikes(self) -> List:
        """Spike shapes overlapping the player's hitbox right now."""
        p = self.controller.player
        box = self.controller.config.hitbox
        return self.collisions.hazards_touching(p.x, p.y, box.width, box.height)

    def step(self) -> List[str]:
        """Advance one tick.

        Returns:
            Events that happened this tick ("hurt", "died"), in order.
        """
        events = []
        was_alive = self.controller.player.alive

        self.controller.update()

        if self.config.level.spikes_hurt and self.controller.player.alive:
            if self.touching_spikes() and self.controller.hurt(1):
                self.hits_taken += 1
                events.append("hurt")

        if was_alive and not self.controller.player.alive:
            events.append("died")
        return events

    def frame(self) -> RenderFrame:
        return self.controller.frame()

    def get_state(self) -> Dict[str, Any]:
        """Snapshot for logging/observation."""
        p = self.controller.player
        return {
            "position": (p.x, p.y),
            "velocity": (p.vx, p.vy),
            "facing_right": p.facing_right,
            "jumping": p.jumping,
            "attacking": p.attacking,
            "alive": p.alive,
            "health": p.health,
            "state": self.controller.state.name.lower(),
            "frame_index": self.controller.cursor.frame_index,
            "ticks": self.controller.ticks,
            "hits_taken": self.hits_taken,
        }
