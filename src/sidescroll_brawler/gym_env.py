"""Gymnasium environment wrapper for the brawler.

Provides the standard Gym API for RL training and data collection. Each step
is one fixed 1/60 s tick of the same GameWorld the interactive engine runs.
"""

import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Any, Tuple

import pygame

from .config import GameConfig
from .controls import InputState
from .level_gen import LevelGenerator, LevelSpec, default_level
from .render import draw_hud, draw_overlay, draw_world, COLOR_COIN, COLOR_ENEMY
from .sounds import RecordingSoundBus
from .world import GameWorld


STATE_SIZE = 16

MOVE_NONE = 0
MOVE_LEFT = 1
MOVE_RIGHT = 2


class BrawlerEnv(gymnasium.Env):
    """Gymnasium wrapper for the brawler.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame (zeros unless
               render_mode is set)
        'state': float32 array of shape (16,) - state vector containing:
            [0-1] player position (x, y)
            [2-3] player velocity (vx, vy)
            [4]   player grounded (0/1)
            [5]   stamina fraction (0-1)
            [6]   lives
            [7]   coins collected
            [8]   invincible (0/1)
            [9]   punching (0/1)
            [10-11] offset to nearest alive enemy (dx, dy), 0 if none
            [12]  boss active (0/1)
            [13]  boss health
            [14]  camera x
            [15]  episode progress (steps / max_steps)

    Action space (Dict):
        'move':   {0: none, 1: left, 2: right}
        'jump':   {0, 1}
        'sprint': {0, 1}
        'punch':  {0, 1} - a press; ignored while punching or cooling down

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        coin, kill, boss_hit: counts gained this step
        damage:   lives lost this step
        win / game_over: 1.0 on the terminal step
        step:     1.0 every step
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (256, 256),
        max_episode_steps: int = 3000,
        reward_weights: Optional[Dict[str, float]] = None,
        random_levels: bool = False,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps
        self.random_levels = random_levels

        self.reward_weights = reward_weights or {
            "coin": 1.0,
            "kill": 2.0,
            "boss_hit": 5.0,
            "damage": -5.0,
            "win": 100.0,
            "game_over": -50.0,
            "step": -0.01,
        }

        self.action_space = spaces.Dict({
            "move": spaces.Discrete(3),
            "jump": spaces.Discrete(2),
            "sprint": spaces.Discrete(2),
            "punch": spaces.Discrete(2),
        })

        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(STATE_SIZE,),
                dtype=np.float32,
            ),
        })

        # Initialize pygame (caller sets SDL_VIDEODRIVER for headless)
        if not pygame.get_init():
            pygame.init()

        self._surface = pygame.Surface(
            (self.config.screen_width, self.config.screen_height)
        )
        self._display = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self.config.screen_width, self.config.screen_height)
            )
            pygame.display.set_caption("BrawlerEnv")

        self.sounds = RecordingSoundBus()
        self._world: Optional[GameWorld] = None
        self._level_spec: Optional[LevelSpec] = None
        self._level_seed: int = 0
        self._episode_steps = 0
        self._now = 0.0
        self._prev_counts: Dict[str, int] = {}

        self._dt_ms = 1000.0 / self.config.fps

    @property
    def world(self) -> Optional[GameWorld]:
        return self._world

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        options = options or {}

        level_seed = int(self.np_random.integers(0, 2**31))
        if options.get("random_level", self.random_levels):
            self._level_spec = LevelGenerator(self.config).generate(seed=level_seed)
        else:
            self._level_spec = default_level(self.config)
        self._level_seed = level_seed

        self.sounds.clear()
        self._world = GameWorld(
            self.config, level=self._level_spec, sounds=self.sounds, seed=level_seed,
        )
        self._episode_steps = 0
        self._now = 0.0
        self._prev_counts = self._counts()

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._world is not None, "Must call reset() before step()"

        self._now += self._dt_ms
        inputs = self._apply_action(action)
        self._world.step(self._dt_ms, self._now, inputs)
        self._episode_steps += 1

        reward_signals = self._compute_rewards()
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = self._world.finished
        truncated = self._episode_steps >= self.max_episode_steps

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Action handling
    # ------------------------------------------------------------------

    def _apply_action(self, action) -> InputState:
        move = int(np.asarray(action["move"]).item())
        if int(np.asarray(action.get("punch", 0)).item()):
            self._world.press_punch(self._now)
        return InputState(
            move_left=move == MOVE_LEFT,
            move_right=move == MOVE_RIGHT,
            jump=bool(int(np.asarray(action.get("jump", 0)).item())),
            sprint=bool(int(np.asarray(action.get("sprint", 0)).item())),
        )

    # ------------------------------------------------------------------
    # Reward computation
    # ------------------------------------------------------------------

    def _counts(self) -> Dict[str, int]:
        world = self._world
        return {
            "coin": world.player.coins_collected,
            "kill": world.stats.enemies_defeated,
            "boss_hit": world.stats.boss_hits,
            "damage": world.stats.damage_taken,
        }

    def _compute_rewards(self) -> Dict[str, float]:
        counts = self._counts()
        signals = {k: float(counts[k] - self._prev_counts.get(k, 0)) for k in counts}
        self._prev_counts = counts
        signals["win"] = 1.0 if self._world.win else 0.0
        signals["game_over"] = 1.0 if self._world.game_over else 0.0
        signals["step"] = 1.0
        return signals

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self):
        if self.render_mode in ("rgb_array", "human"):
            rgb = self._render_frame()
        else:
            rgb = np.zeros((self.obs_height, self.obs_width, 3), dtype=np.uint8)
        return {"rgb": rgb, "state": self._get_state_vector()}

    def _get_state_vector(self):
        world = self._world
        player = world.player
        state = np.zeros(STATE_SIZE, dtype=np.float32)

        state[0] = player.x
        state[1] = player.y
        state[2] = player.vx
        state[3] = player.vy
        state[4] = float(player.on_ground)
        state[5] = player.stamina / player.config.max_stamina
        state[6] = float(player.lives)
        state[7] = float(player.coins_collected)
        state[8] = float(player.is_invincible)
        state[9] = float(player.is_punching)

        alive = [e for e in world.enemies if e.alive]
        if alive:
            nearest = min(alive, key=lambda e: abs(e.x - player.x))
            state[10] = nearest.x - player.x
            state[11] = nearest.y - player.y

        if world.boss is not None:
            state[12] = 1.0
            state[13] = float(world.boss.health)
        state[14] = world.camera.x
        state[15] = float(self._episode_steps) / max(self.max_episode_steps, 1)
        return state

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        draw_world(self._surface, self._world)
        scaled = pygame.transform.scale(self._surface, (self.obs_width, self.obs_height))
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(scaled)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            draw_world(self._surface, self._world)
            self._display.blit(self._surface, (0, 0))
            # HUD on the display only, not in the observation RGB
            draw_hud(self._display, self._world.hud())
            if self._world.win:
                draw_overlay(self._display, "YOU WIN!", color=COLOR_COIN)
            elif self._world.game_over:
                draw_overlay(self._display, "GAME OVER", color=COLOR_ENEMY)
            pygame.display.flip()

    def _get_info(self):
        world = self._world
        info = {
            "coins": world.player.coins_collected,
            "lives": world.player.lives,
            "episode_steps": self._episode_steps,
            "win": world.win,
            "game_over": world.game_over,
            "boss_active": world.boss_active,
            "player_position": (world.player.x, world.player.y),
            "stats": world.stats.to_dict(),
            "level_seed": self._level_seed,
        }
        if self._level_spec:
            info["level_name"] = self._level_spec.name
        return info

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
