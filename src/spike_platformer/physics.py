"""Physics: integer kinematics and pymunk-backed hazard queries.

Movement is a plain per-tick Euler step in screen coordinates (y grows
downward) with a flat ground clamp. Pymunk is only used as a spatial
index for the level's spikes: the player's hitbox is shape-queried
against static boxes, nothing is ever stepped.
"""

import pymunk
from typing import List, Tuple, TYPE_CHECKING

from .config import ControllerConfig

if TYPE_CHECKING:
    from .controller import PlayerState
    from .level import LevelGrid


# Collision types for different entity categories
COLLISION_PLAYER = 1
COLLISION_HAZARD = 3


def integrate(player: "PlayerState", config: ControllerConfig) -> bool:
    """Advance position and velocity by one tick.

    Position is updated with the velocity from the previous tick, then
    gravity is added. If the sprite ends up below the floor it is clamped
    there and the jump ends.

    Returns:
        True if the ground clamp fired this tick.
    """
    player.y += player.vy
    player.vy += config.gravity

    player.x += player.vx

    if player.y > config.floor_y:
        player.y = config.floor_y
        player.vy = 0
        player.jumping = False
        return True
    return False


class CollisionWorld:
    """Static hazard shapes in a pymunk space.

    The space has no gravity and is never stepped; queries use the
    shapes' current transforms directly.
    """

    def __init__(self):
        self.space = pymunk.Space()
        self.space.gravity = (0, 0)
        self.hazards: List[pymunk.Shape] = []

        # Query probe for the player's hitbox. Not added to the space.
        self._probe_body = pymunk.Body(body_type=pymunk.Body.KINEMATIC)
        self._probe_shape = None
        self._probe_size: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def from_level(cls, level: "LevelGrid") -> "CollisionWorld":
        """One static box per spike cell."""
        from .level import CellKind

        world = cls()
        for col, row, _ in level.cells_of(CellKind.SPIKE):
            left, top, w, h = level.cell_rect(col, row)
            world.add_hazard(left + w / 2, top + h / 2, w, h)
        return world

    def add_hazard(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> pymunk.Shape:
        """Create a static rectangular hazard.

        Args:
            x, y: Center position
            width, height: Dimensions

        Returns:
            The created shape (already added to space)
        """
        body = self.space.static_body
        # Create box vertices centered at origin, then offset
        half_w, half_h = width / 2, height / 2
        vertices = [
            (-half_w, -half_h),
            (half_w, -half_h),
            (half_w, half_h),
            (-half_w, half_h),
        ]
        shape = pymunk.Poly(body, vertices, transform=pymunk.Transform.translation(x, y))
        shape.collision_type = COLLISION_HAZARD
        self.space.add(shape)
        self.hazards.append(shape)
        return shape

    def _probe(self, width: float, height: float) -> pymunk.Shape:
        if self._probe_shape is None or self._probe_size != (width, height):
            self._probe_shape = pymunk.Poly.create_box(self._probe_body, (width, height))
            self._probe_shape.collision_type = COLLISION_PLAYER
            self._probe_size = (width, height)
        return self._probe_shape

    def hazards_touching(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> List[pymunk.Shape]:
        """Hazard shapes overlapping the box with top-left corner (x, y)."""
        if not self.hazards:
            return []
        shape = self._probe(width, height)
        self._probe_body.position = (x + width / 2, y + height / 2)
        hits = self.space.shape_query(shape)
        return [
            info.shape for info in hits
            if info.shape is not None
            and info.shape.collision_type == COLLISION_HAZARD
            and info.contact_point_set.points
        ]
