"""Configuration system for the spike platformer.

ControllerConfig holds the player's movement and animation tuning in the
integer tick units the controller works in (pixels, pixels per tick, ticks).
LevelConfig describes the screen-sized tile grid and whether spikes hurt.
GameConfig ties both together with display settings and the asset directory.

All values are plain dataclass fields so presets can be written inline
(see CONFIGS at the bottom of this module).
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple, Dict, Any


class HorizontalModel(Enum):
    """How a horizontal key press maps to motion."""
    VELOCITY = auto()  # key down sets vx, integrator moves x every tick
    STEP = auto()      # each key-down event (incl. key repeat) nudges x directly


@dataclass
class PlayerHitbox:
    """Collision box anchored at the sprite's top-left corner (non-behavioral)."""
    width: int = 40
    height: int = 70


@dataclass
class ControllerConfig:
    """Player movement, physics and animation tuning.

    Units are integer ticks and pixels: gravity is added to vy once per
    tick, move_speed is the horizontal velocity (or step) in px, and
    frame_delay is the number of ticks each animation frame is shown.
    """

    # Physics
    gravity: int = 1  # px/tick^2, positive = down (screen coordinates)
    jump_impulse: int = 15  # Upward speed applied on jump (vy = -jump_impulse)
    floor_y: int = 500  # Ground clamp for the sprite's top edge

    # Movement
    move_speed: int = 5
    horizontal_model: HorizontalModel = HorizontalModel.VELOCITY

    # Animation
    frame_delay: int = 8  # Ticks per animation frame

    # Spawn / health
    start_x: int = 100
    start_y: int = 400
    max_health: int = 3
    hurt_cooldown: int = 60  # Invulnerability ticks after taking a hit

    hitbox: PlayerHitbox = field(default_factory=PlayerHitbox)

    def __post_init__(self):
        if self.gravity < 0:
            raise ValueError(f"gravity must be >= 0, got {self.gravity}")
        if self.frame_delay <= 0:
            raise ValueError(f"frame_delay must be > 0, got {self.frame_delay}")
        if self.max_health <= 0:
            raise ValueError(f"max_health must be > 0, got {self.max_health}")
        if self.hurt_cooldown < 0:
            raise ValueError(f"hurt_cooldown must be >= 0, got {self.hurt_cooldown}")

    @property
    def start_position(self) -> Tuple[int, int]:
        """Spawn position (x, y) of the sprite's top-left corner."""
        return self.start_x, self.start_y

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (enum stored by name)."""
        return {
            "gravity": self.gravity,
            "jump_impulse": self.jump_impulse,
            "floor_y": self.floor_y,
            "move_speed": self.move_speed,
            "horizontal_model": self.horizontal_model.name.lower(),
            "frame_delay": self.frame_delay,
            "start_x": self.start_x,
            "start_y": self.start_y,
            "max_health": self.max_health,
            "hurt_cooldown": self.hurt_cooldown,
            "hitbox": {"width": self.hitbox.width, "height": self.hitbox.height},
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ControllerConfig":
        """Create from dictionary, falling back to defaults for missing keys."""
        hitbox = d.get("hitbox", {})
        return cls(
            gravity=d.get("gravity", 1),
            jump_impulse=d.get("jump_impulse", 15),
            floor_y=d.get("floor_y", 500),
            move_speed=d.get("move_speed", 5),
            horizontal_model=HorizontalModel[d.get("horizontal_model", "velocity").upper()],
            frame_delay=d.get("frame_delay", 8),
            start_x=d.get("start_x", 100),
            start_y=d.get("start_y", 400),
            max_health=d.get("max_health", 3),
            hurt_cooldown=d.get("hurt_cooldown", 60),
            hitbox=PlayerHitbox(
                width=hitbox.get("width", 40),
                height=hitbox.get("height", 70),
            ),
        )


@dataclass
class LevelConfig:
    """Tile grid layout.

    The default grid covers an 800x600 screen with 40px tiles: a floor
    row along the bottom with two spikes set into it.
    """
    tile_size: int = 40
    cols: int = 20
    rows: int = 15
    spike_columns: Tuple[int, ...] = (7, 12)
    spikes_hurt: bool = True  # False = spikes are decorative only

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be > 0, got {self.tile_size}")
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"grid must be non-empty, got {self.cols}x{self.rows}")
        for col in self.spike_columns:
            if not 0 <= col < self.cols:
                raise ValueError(f"spike column {col} outside grid of {self.cols} columns")


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    level: LevelConfig = field(default_factory=LevelConfig)

    # Display settings
    screen_width: int = 800
    screen_height: int = 600
    fps: int = 60  # ~16ms per tick
    title: str = "Character + Level + Spikes"

    # Sprite sheet location (relative to the working directory)
    asset_dir: str = "resources"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "controller": self.controller.to_dict(),
            "level": {
                "tile_size": self.level.tile_size,
                "cols": self.level.cols,
                "rows": self.level.rows,
                "spike_columns": list(self.level.spike_columns),
                "spikes_hurt": self.level.spikes_hurt,
            },
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "fps": self.fps,
            "asset_dir": self.asset_dir,
        }


# Predefined configurations for play/demo
CONFIGS = {
    # Default: velocity movement, spikes hurt
    "default": GameConfig(),

    # Spawn higher up, as in the first version of the demo
    "classic": GameConfig(controller=ControllerConfig(start_y=300)),

    # Key-repeat stepping instead of velocity
    "stepper": GameConfig(controller=ControllerConfig(horizontal_model=HorizontalModel.STEP)),

    # Spikes are scenery only
    "decorative": GameConfig(level=LevelConfig(spikes_hurt=False)),

    # One hit and you're done
    "hardcore": GameConfig(controller=ControllerConfig(max_health=1)),

    # High, long jump with slowed animation
    "moon": GameConfig(controller=ControllerConfig(jump_impulse=24, frame_delay=12)),
}
