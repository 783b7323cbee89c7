"""Animation states and frame sequencing.

The six player states form a closed enum. Each state owns an Animation:
an ordered, non-empty tuple of frame identifiers, the number of ticks each
frame is held, and what happens when the sequence runs past its last frame.

Frame identifiers are opaque to the simulation (they are the asset file
names); only the presentation layer turns them into images.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Tuple, Optional


class AnimationState(Enum):
    """Player animation state."""
    IDLE = auto()
    RUN = auto()
    JUMP = auto()
    ATTACK = auto()
    HURT = auto()
    DEATH = auto()


class FramePolicy(Enum):
    """What to do when the frame index overflows."""
    LOOP = auto()      # wrap to frame 0
    ONE_SHOT = auto()  # finish; controller returns to its rest state
    FREEZE = auto()    # hold the last frame forever


@dataclass(frozen=True)
class Animation:
    """Frame sequence for one state."""
    frames: Tuple[str, ...]
    delay: int = 8
    policy: FramePolicy = FramePolicy.LOOP

    def __post_init__(self):
        if not self.frames:
            raise ValueError("animation needs at least one frame")
        if self.delay <= 0:
            raise ValueError(f"delay must be > 0, got {self.delay}")

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def last_index(self) -> int:
        return len(self.frames) - 1


# Default policy per state
STATE_POLICIES: Dict[AnimationState, FramePolicy] = {
    AnimationState.IDLE: FramePolicy.LOOP,
    AnimationState.RUN: FramePolicy.LOOP,
    AnimationState.JUMP: FramePolicy.LOOP,
    AnimationState.ATTACK: FramePolicy.ONE_SHOT,
    AnimationState.HURT: FramePolicy.ONE_SHOT,
    AnimationState.DEATH: FramePolicy.FREEZE,
}


class AnimationSet:
    """Maps every AnimationState to its Animation.

    Construction fails if any state is missing, so lookups during a tick
    can never come up empty.
    """

    def __init__(self, animations: Dict[AnimationState, Animation]):
        missing = [s.name.lower() for s in AnimationState if s not in animations]
        if missing:
            raise ValueError(f"missing animations for: {', '.join(missing)}")
        self._animations = dict(animations)

    def __getitem__(self, state: AnimationState) -> Animation:
        return self._animations[state]

    def frame_ids(self) -> Tuple[str, ...]:
        """Every distinct frame identifier, in first-use order."""
        seen: Dict[str, None] = {}
        for state in AnimationState:
            for frame in self._animations[state].frames:
                seen.setdefault(frame, None)
        return tuple(seen)

    @classmethod
    def from_frames(
        cls,
        frames: Dict[AnimationState, Tuple[str, ...]],
        delay: int = 8,
    ) -> "AnimationSet":
        """Build a set using the default policy for each state."""
        return cls({
            state: Animation(tuple(frames[state]), delay=delay, policy=STATE_POLICIES[state])
            for state in AnimationState
            if state in frames
        })


@dataclass
class AnimationCursor:
    """Position inside the active animation."""
    frame_index: int = 0
    frame_timer: int = 0

    def reset(self) -> None:
        self.frame_index = 0
        self.frame_timer = 0

    def advance(self, animation: Animation) -> bool:
        """Advance one tick.

        Returns True when a ONE_SHOT animation has just run past its last
        frame; the index is rewound to 0 so it stays in bounds, and the
        caller is expected to switch state.
        """
        self.frame_timer += 1
        if self.frame_timer < animation.delay:
            return False
        self.frame_timer = 0

        if self.frame_index < animation.last_index:
            self.frame_index += 1
            return False

        # Overflow past the last frame
        if animation.policy == FramePolicy.FREEZE:
            self.frame_index = animation.last_index
            return False
        self.frame_index = 0
        return animation.policy == FramePolicy.ONE_SHOT

    def current_frame(self, animation: Animation) -> str:
        return animation.frames[self.frame_index]


def default_animations(frames: Optional[Dict[AnimationState, Tuple[str, ...]]] = None,
                       delay: int = 8) -> AnimationSet:
    """Animation set for the stock sprite sheet.

    Args:
        frames: Frame ids per state. Defaults to the stock manifest's names.
        delay: Ticks per frame for every state.
    """
    if frames is None:
        from .assets import default_manifest
        frames = default_manifest().frames
    return AnimationSet.from_frames(frames, delay=delay)
