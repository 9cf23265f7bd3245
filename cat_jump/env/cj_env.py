# cat_jump/env/cj_env.py
from __future__ import annotations
from typing import Optional, Dict, Any, Union
import numpy as np
import gymnasium as gym
import pygame

from cat_jump.game.config import WIDTH, HEIGHT, Difficulty, EngineConfig, parse_difficulty
from cat_jump.game.engine import CatJumpEngine, Phase
from cat_jump.game.render import draw_snapshot
from cat_jump.env.observations import OBS_DIM, build_observation


class CatJumpEnv(gym.Env):
    """
    Cat Jump Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), one engine step per frame.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = jump key up, 1 = jump key held.
    - Observation: shape (9,), float32 (see build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    LIFE_LOST_PENALTY = 5.0

    def __init__(self,
                 render_mode: Optional[str] = None,
                 difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 config: Optional[EngineConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], f"Invalid render_mode {render_mode}"
        self.render_mode = render_mode
        self.difficulty = parse_difficulty(difficulty)
        self.frame_skip = int(frame_skip)
        self.config = config

        # Internal sim timing
        self.sim_fps = 60
        self.dt_ms = 1000.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)

        # [y, vy, speed, invincible, obs1_dx, obs2_dx, fish_dx, fish_lane, lives]
        low = np.array([0.0, -1.0] + [0.0] * (OBS_DIM - 2), dtype=np.float32)
        high = np.ones(OBS_DIM, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.engine: Optional[CatJumpEngine] = None
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seeded -> strictly reproducible; None -> the engine picks its own seed
        engine_seed = int(seed) if seed is not None else None
        difficulty = self.difficulty
        if options and "difficulty" in options:
            difficulty = parse_difficulty(options["difficulty"])

        self.engine = CatJumpEngine(config=self.config, seed=engine_seed)
        self.engine.start(difficulty)

        self.timestep = 0

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None, "Call reset() before step()"

        eng = self.engine
        score_before = eng.score
        lives_before = eng.lives

        for _ in range(self.frame_skip):
            eng.step(self.dt_ms, jump_held=bool(action == 1))
            if eng.phase is not Phase.PLAYING:
                break

        lives_lost = lives_before - eng.lives
        reward = float(eng.score - score_before) - self.LIFE_LOST_PENALTY * lives_lost

        self.timestep += 1
        terminated = eng.phase is Phase.GAME_OVER
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.engine is not None
        return build_observation(self.engine.snapshot(), self.engine.config)

    def _info(self) -> Dict[str, Any]:
        assert self.engine is not None
        return {
            "score": self.engine.score,
            "lives": self.engine.lives,
            "seed": self.engine.seed,
            "difficulty": self.engine.difficulty.value if self.engine.difficulty else None,
            "timestep": self.timestep,
            "hits": self.engine.obstacles_hit,
            "fish": self.engine.fish_collected,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.engine is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Cat Jump — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 22)

        draw_snapshot(self.screen, self.engine.snapshot(), self.font)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
