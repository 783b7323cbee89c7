"""spike-platformer: a small side-scrolling platformer demo.

A player sprite with idle/run/jump/attack/hurt/death animations runs and
jumps over a floor with spikes set into it. The simulation (physics,
input mapping and the animation state machine) is pure Python data and
runs headless; pygame is only needed to load images and draw them.
"""

from .config import ControllerConfig, LevelConfig, GameConfig, HorizontalModel, PlayerHitbox, CONFIGS
from .animation import AnimationState, Animation, AnimationSet, AnimationCursor, FramePolicy
from .controller import CharacterController, PlayerState, Key, RenderFrame
from .level import CellKind, LevelGrid, build_default_level
from .physics import CollisionWorld, integrate
from .world import World
from .assets import AssetManifest, AssetLoadError, default_manifest, load_assets

__all__ = [
    "ControllerConfig",
    "LevelConfig",
    "GameConfig",
    "HorizontalModel",
    "PlayerHitbox",
    "CONFIGS",
    "AnimationState",
    "Animation",
    "AnimationSet",
    "AnimationCursor",
    "FramePolicy",
    "CharacterController",
    "PlayerState",
    "Key",
    "RenderFrame",
    "CellKind",
    "LevelGrid",
    "build_default_level",
    "CollisionWorld",
    "integrate",
    "World",
    "AssetManifest",
    "AssetLoadError",
    "default_manifest",
    "load_assets",
]
