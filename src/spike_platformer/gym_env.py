"""Gymnasium environment wrapper for the spike platformer.

Runs the World headless. Actions are held-key intents which the wrapper
turns into key down/up events, so agents exercise exactly the same input
path as a human player.
"""

import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Tuple

import pygame

from .animation import AnimationState
from .config import GameConfig
from .controller import Key
from .render import ShapeRenderer
from .world import World


STATE_DIM = 11

# move action -> horizontal key to hold
_MOVE_KEYS = {0: None, 1: Key.LEFT, 2: Key.RIGHT}


class SpikePlatformerEnv(gymnasium.Env):
    """Gymnasium wrapper for the spike platformer.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame (zeros unless render_mode is set)
        'state': float32 array of shape (11,) - state vector containing:
            [0-1] player position (x, y)
            [2-3] player velocity (vx, vy)
            [4]   facing right (0/1)
            [5]   jumping (0/1)
            [6]   attacking (0/1)
            [7]   alive (0/1)
            [8]   health
            [9]   animation state index (0-5)
            [10]  invulnerable ticks remaining

    Action space (Dict):
        'move':   0 = none, 1 = left, 2 = right (held)
        'jump':   {0, 1} - UP held
        'attack': {0, 1} - SPACE held

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        progress: delta_x (rightward movement in pixels)
        hurt:     1.0 on a tick the player lost health
        death:    1.0 on the tick the player died
        step:     1.0 every step
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (120, 160),
        max_episode_steps: int = 1000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "progress": 0.1,
            "hurt": -10.0,
            "death": -50.0,
            "step": -0.01,
        }

        self.action_space = spaces.Dict({
            "move": spaces.Discrete(3),
            "jump": spaces.Discrete(2),
            "attack": spaces.Discrete(2),
        })

        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(STATE_DIM,),
                dtype=np.float32,
            ),
        })

        self.world = World(self.config)
        self._renderer = ShapeRenderer(
            (self.config.controller.hitbox.width, self.config.controller.hitbox.height)
        )
        self._surface: Optional[pygame.Surface] = None

        self._held: set = set()
        self._episode_steps = 0
        self._prev_x = 0

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        self.world.reset()
        self._held = set()
        self._episode_steps = 0
        self._prev_x = self.world.player.x

        return self._get_obs(), self._get_info()

    def step(self, action):
        self._apply_action(action)
        tick_events = self.world.step()
        self._episode_steps += 1

        reward_signals = self._compute_rewards(tick_events)
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = self.world.game_over
        truncated = self._episode_steps >= self.max_episode_steps

        info = self._get_info()
        info["reward_signals"] = reward_signals
        info["events"] = tick_events
        return self._get_obs(), float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Action handling
    # ------------------------------------------------------------------

    def _apply_action(self, action):
        wanted = set()
        move_key = _MOVE_KEYS[int(np.asarray(action["move"]).item())]
        if move_key is not None:
            wanted.add(move_key)
        if int(np.asarray(action["jump"]).item()):
            wanted.add(Key.UP)
        if int(np.asarray(action["attack"]).item()):
            wanted.add(Key.SPACE)

        # Release first so a left->right switch ends up facing right
        for key in self._held - wanted:
            self.world.key_up(key)
        for key in wanted - self._held:
            self.world.key_down(key)
        self._held = wanted

    # ------------------------------------------------------------------
    # Reward / observation
    # ------------------------------------------------------------------

    def _compute_rewards(self, tick_events):
        x = self.world.player.x
        signals = {
            "progress": float(x - self._prev_x),
            "hurt": 1.0 if "hurt" in tick_events else 0.0,
            "death": 1.0 if "died" in tick_events else 0.0,
            "step": 1.0,
        }
        self._prev_x = x
        return signals

    def _get_obs(self):
        if self.render_mode == "rgb_array":
            rgb = self._render_frame()
        else:
            rgb = np.zeros((self.obs_height, self.obs_width, 3), dtype=np.uint8)
        return {"rgb": rgb, "state": self._get_state_vector()}

    def _get_state_vector(self):
        p = self.world.player
        state = np.zeros(STATE_DIM, dtype=np.float32)
        state[0] = p.x
        state[1] = p.y
        state[2] = p.vx
        state[3] = p.vy
        state[4] = float(p.facing_right)
        state[5] = float(p.jumping)
        state[6] = float(p.attacking)
        state[7] = float(p.alive)
        state[8] = p.health
        state[9] = float(list(AnimationState).index(self.world.controller.state))
        state[10] = p.invulnerable
        return state

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        if self._surface is None:
            if not pygame.get_init():
                pygame.init()
            self._surface = pygame.Surface(
                (self.config.screen_width, self.config.screen_height)
            )
        self._renderer.render(self._surface, self.world.level, self.world.frame())

        scaled = pygame.transform.scale(self._surface, (self.obs_width, self.obs_height))
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(scaled)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        return None

    def _get_info(self):
        info = self.world.get_state()
        info["episode_steps"] = self._episode_steps
        return info

    def close(self):
        self._surface = None
