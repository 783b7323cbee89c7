"""Sprite asset manifest and loading.

The game ships a fixed set of image files. Loading is all-or-nothing:
the first missing or undecodable file raises AssetLoadError, so nothing
downstream ever sees a half-populated frame table.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pygame

from .animation import AnimationState


class AssetLoadError(Exception):
    """Raised when a sprite file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot load asset '{self.path}': {reason}")


@dataclass
class AssetManifest:
    """Names of every image the game needs.

    tiles: logical tile name -> file name ("floor", "spike")
    frames: animation state -> ordered frame file names
    """
    tiles: Dict[str, str] = field(default_factory=dict)
    frames: Dict[AnimationState, Tuple[str, ...]] = field(default_factory=dict)

    def filenames(self) -> List[str]:
        """All distinct file names, tiles first, in a stable order."""
        names: Dict[str, None] = {}
        for name in self.tiles.values():
            names.setdefault(name, None)
        for state in AnimationState:
            for name in self.frames.get(state, ()):
                names.setdefault(name, None)
        return list(names)


def default_manifest() -> AssetManifest:
    """Manifest for the stock sprite sheet."""
    return AssetManifest(
        tiles={
            "floor": "stone brick.png",
            "spike": "spike.png",
        },
        frames={
            AnimationState.IDLE: tuple(f"idle ({i}).png" for i in range(1, 5)),
            AnimationState.RUN: tuple(f"run ({i}).png" for i in range(1, 7)),
            # No dedicated jump art; borrow a mid-stride run frame
            AnimationState.JUMP: ("run (3).png",),
            AnimationState.ATTACK: tuple(f"attack1 ({i}).png" for i in range(1, 5)),
            AnimationState.HURT: tuple(f"hurt ({i}).png" for i in range(1, 3)),
            AnimationState.DEATH: tuple(f"death{i}.png" for i in range(1, 5)),
        },
    )


def missing_assets(manifest: AssetManifest, asset_dir: Union[str, Path]) -> List[Path]:
    """List every manifest file that does not exist under asset_dir."""
    root = Path(asset_dir)
    return [root / name for name in manifest.filenames() if not (root / name).is_file()]


def load_assets(
    manifest: AssetManifest,
    asset_dir: Union[str, Path],
) -> Dict[str, pygame.Surface]:
    """Load every image in the manifest.

    Args:
        manifest: Files to load.
        asset_dir: Directory containing the files.

    Returns:
        Mapping of file name -> pygame Surface.

    Raises:
        AssetLoadError: On the first file that is missing or cannot be decoded.
    """
    root = Path(asset_dir)
    # convert_alpha() needs a display mode; headless loads keep the raw surface
    can_convert = pygame.display.get_init() and pygame.display.get_surface() is not None

    images: Dict[str, pygame.Surface] = {}
    for name in manifest.filenames():
        path = root / name
        if not path.is_file():
            raise AssetLoadError(path, "file not found")
        try:
            surface = pygame.image.load(str(path))
        except (pygame.error, OSError) as e:
            raise AssetLoadError(path, str(e)) from e
        images[name] = surface.convert_alpha() if can_convert else surface
    return images
