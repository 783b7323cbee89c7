"""Character controller: input mapping, physics and the animation state machine.

The controller owns two pieces of pure data, PlayerState and
AnimationCursor, and mutates them in response to key events and ticks.
It never touches pygame, so the whole simulation runs headless; the
presentation layer reads `frame()` once per tick.

State machine summary:

    IDLE   <-> RUN      horizontal key down / up
    IDLE/RUN -> JUMP    UP while grounded; held while `jumping`
    *      -> ATTACK    SPACE while not attacking; one-shot
    *      -> HURT      hurt() with health left; one-shot
    *      -> DEATH     health reaches 0 or kill(); terminal, frozen on last frame

One-shot animations and landings return to the rest state: JUMP while
airborne, RUN while a horizontal key is held, IDLE otherwise.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple, Optional, Set

from .animation import Animation, AnimationCursor, AnimationSet, AnimationState, default_animations
from .config import ControllerConfig, HorizontalModel
from .physics import integrate


class Key(Enum):
    """Logical input keys."""
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    SPACE = auto()


HORIZONTAL_KEYS = (Key.LEFT, Key.RIGHT)

# States that input may not replace while they play out
_BUSY_STATES = (AnimationState.ATTACK, AnimationState.HURT)


@dataclass
class PlayerState:
    """Simulation state of the player sprite (top-left corner, screen coords)."""
    x: int = 100
    y: int = 400
    vx: int = 0
    vy: int = 0
    facing_right: bool = True
    jumping: bool = False
    attacking: bool = False
    alive: bool = True
    health: int = 3
    invulnerable: int = 0  # Ticks of post-hit grace remaining


class RenderFrame(NamedTuple):
    """Everything the renderer needs for the player this tick."""
    frame: str
    x: int
    y: int
    flip: bool
    health: int
    state: AnimationState


class CharacterController:
    """Drives one player through physics ticks and key events."""

    def __init__(
        self,
        config: Optional[ControllerConfig] = None,
        animations: Optional[AnimationSet] = None,
    ):
        """Create a controller with a fresh player at the spawn point.

        Args:
            config: Movement/animation tuning. Uses defaults if None.
            animations: Frame sequences per state. Uses the stock sprite
                sheet names with config.frame_delay if None.
        """
        self.config = config or ControllerConfig()
        self.animations = animations or default_animations(delay=self.config.frame_delay)

        self.player = PlayerState()
        self.cursor = AnimationCursor()
        self._state = AnimationState.IDLE
        self._held: Set[Key] = set()
        self.ticks = 0

        self.reset()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> AnimationState:
        """Active animation state."""
        return self._state

    @property
    def animation(self) -> Animation:
        return self.animations[self._state]

    @property
    def held_keys(self) -> Set[Key]:
        return set(self._held)

    def frame(self) -> RenderFrame:
        """Current sprite frame, draw position and facing."""
        p = self.player
        return RenderFrame(
            frame=self.cursor.current_frame(self.animation),
            x=p.x,
            y=p.y,
            flip=not p.facing_right,
            health=p.health,
            state=self._state,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Restore spawn defaults."""
        c = self.config
        self.player = PlayerState(x=c.start_x, y=c.start_y, health=c.max_health)
        self.cursor.reset()
        self._state = AnimationState.IDLE
        self._held.clear()
        self.ticks = 0

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key_down(self, key: Key) -> None:
        """Handle a key press (also called for OS key repeats)."""
        p = self.player
        if not p.alive:
            return
        self._held.add(key)

        if key in HORIZONTAL_KEYS:
            self._move(key)
        elif key == Key.UP:
            if not p.jumping:
                p.vy = -self.config.jump_impulse
                p.jumping = True
                if self._state not in _BUSY_STATES:
                    self._set_state(AnimationState.JUMP)
        elif key == Key.SPACE:
            if not p.attacking and self._state != AnimationState.HURT:
                p.attacking = True
                self._set_state(AnimationState.ATTACK)
                self.cursor.reset()

    def on_key_up(self, key: Key) -> None:
        """Handle a key release."""
        p = self.player
        if not p.alive:
            return
        self._held.discard(key)

        if key not in HORIZONTAL_KEYS:
            return

        # Fall back to the other direction if it is still held
        for other in HORIZONTAL_KEYS:
            if other in self._held:
                self._steer(other)
                return

        p.vx = 0
        if self._state not in _BUSY_STATES and not p.jumping:
            self._set_state(AnimationState.IDLE)

    def _move(self, key: Key) -> None:
        """Key-down movement: steer, plus one step in the STEP model."""
        self._steer(key)
        if self.config.horizontal_model == HorizontalModel.STEP:
            direction = -1 if key == Key.LEFT else 1
            self.player.x += direction * self.config.move_speed

    def _steer(self, key: Key) -> None:
        p = self.player
        direction = -1 if key == Key.LEFT else 1
        p.facing_right = direction > 0

        if self.config.horizontal_model == HorizontalModel.VELOCITY:
            p.vx = direction * self.config.move_speed

        if self._state not in _BUSY_STATES and not p.jumping:
            self._set_state(AnimationState.RUN)

    # ------------------------------------------------------------------
    # Damage
    # ------------------------------------------------------------------

    def hurt(self, amount: int = 1) -> bool:
        """Apply damage.

        Ignored while dead or invulnerable. Returns True if health was lost.
        """
        p = self.player
        if not p.alive or p.invulnerable > 0 or amount <= 0:
            return False

        p.health = max(0, p.health - amount)
        if p.health == 0:
            self.kill()
            return True

        p.attacking = False
        p.invulnerable = self.config.hurt_cooldown
        self._set_state(AnimationState.HURT)
        self.cursor.reset()
        return True

    def kill(self) -> None:
        """Enter the terminal DEATH state."""
        p = self.player
        if not p.alive:
            return
        p.alive = False
        p.health = 0
        p.vx = 0
        p.attacking = False
        self._held.clear()
        self._set_state(AnimationState.DEATH)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Advance physics and animation by one tick."""
        p = self.player
        self.ticks += 1

        landed = integrate(p, self.config)

        if p.invulnerable > 0:
            p.invulnerable -= 1

        if p.jumping and self._state in (AnimationState.IDLE, AnimationState.RUN):
            self._set_state(AnimationState.JUMP)
        elif landed and self._state == AnimationState.JUMP:
            self._set_state(self._rest_state())

        if self.cursor.advance(self.animation):
            if self._state == AnimationState.ATTACK:
                p.attacking = False
            self._set_state(self._rest_state())

    def _rest_state(self) -> AnimationState:
        if self.player.jumping:
            return AnimationState.JUMP
        if any(k in self._held for k in HORIZONTAL_KEYS):
            return AnimationState.RUN
        return AnimationState.IDLE

    def _set_state(self, state: AnimationState) -> None:
        # Death is terminal; re-entering the active state keeps the cursor
        if self._state == AnimationState.DEATH or state == self._state:
            return
        self._state = state
        self.cursor.reset()
