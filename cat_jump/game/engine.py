# cat_jump/game/engine.py
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .config import (
    Difficulty, DifficultyPreset, EngineConfig, JumpMode, parse_difficulty
)
from .collisions import resolve_collisions
from .level import LevelGen
from .player import Cat
from .status import CatAnimation, StatusTimers

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class CatPose:
    x: float
    y: float
    vy: float
    width: float
    height: float
    jumping: bool
    invincible: bool
    animation: CatAnimation


@dataclass(frozen=True)
class ObstacleView:
    id: int
    x: float
    width: float
    height: float


@dataclass(frozen=True)
class FishView:
    id: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of everything a renderer needs for one frame."""
    phase: Phase
    difficulty: Optional[Difficulty]
    score: float
    lives: int
    speed: float
    elapsed_ms: float
    frame: int
    cat: CatPose
    obstacles: Tuple[ObstacleView, ...]
    fishes: Tuple[FishView, ...]

    @property
    def display_score(self) -> int:
        return int(math.floor(self.score))

    @property
    def animation(self) -> CatAnimation:
        return self.cat.animation


class CatJumpEngine:
    """
    Frame-stepped session controller. The host owns the loop and calls
    step(delta_ms, jump_held) once per display frame; nothing runs on its own.

    Phases: START -> PLAYING -> GAME_OVER -> (replay) PLAYING.
    Calls made in the wrong phase are ignored and return False.
    """
    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 seed: Optional[int] = None,
                 rng: Optional[random.Random] = None):
        self.config = (config or EngineConfig()).validate()

        # A caller-supplied rng wins; the seed is then unknown and reported as None
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        else:
            seed = None
        self.seed = seed
        self.rng = rng

        self.phase = Phase.START
        self.difficulty: Optional[Difficulty] = None
        self.preset: DifficultyPreset = self.config.difficulties[Difficulty.MEDIUM]

        cfg = self.config
        self.cat = Cat(x=cfg.cat_x, width=cfg.cat_w, height=cfg.cat_h,
                       gravity=cfg.gravity, jump_strength=cfg.jump_strength)
        self.status = StatusTimers()
        self.level = LevelGen(self.preset, cfg, self.rng)

        self.score = 0.0
        self.lives = cfg.initial_lives
        self.speed = self.preset.initial_speed
        self.elapsed_ms = 0.0
        self.frame = 0
        self.obstacles_hit = 0
        self.fish_collected = 0

        # input buffer, sampled at the start of step()
        self._held = False
        self._tapped = False
        self._prev_held = False
        self._armed = False

    # -------------------- Lifecycle --------------------

    def start(self, difficulty: Union[Difficulty, str]) -> bool:
        """Begin a session from START or GAME_OVER. An unknown difficulty raises ConfigError."""
        difficulty = parse_difficulty(difficulty)
        if self.phase is Phase.PLAYING:
            logger.debug("start(%s) ignored: session already playing", difficulty.value)
            return False

        self.difficulty = difficulty
        self.preset = self.config.difficulties[difficulty]
        self._reset_session()
        self.phase = Phase.PLAYING
        logger.info("session started: difficulty=%s seed=%s", difficulty.value, self.seed)
        return True

    def replay(self) -> bool:
        """Restart with the previous difficulty. Only valid after a game over."""
        if self.phase is not Phase.GAME_OVER or self.difficulty is None:
            logger.debug("replay() ignored in phase %s", self.phase.value)
            return False
        return self.start(self.difficulty)

    def _reset_session(self):
        self.score = 0.0
        self.lives = self.config.initial_lives
        self.speed = self.preset.initial_speed
        self.elapsed_ms = 0.0
        self.frame = 0
        self.obstacles_hit = 0
        self.fish_collected = 0
        self.cat.reset()
        self.status.reset()
        self.level.preset = self.preset
        self.level.clear()
        self._tapped = False
        self._prev_held = self._held
        self._armed = False

    # -------------------- Input --------------------

    def jump_pressed(self):
        self._held = True
        self._tapped = True

    def jump_released(self):
        self._held = False

    def _wants_jump(self, held: bool) -> bool:
        pressed_edge = self._tapped or (held and not self._prev_held)
        self._tapped = False
        self._prev_held = held

        if self.config.jump_mode is JumpMode.HOLD:
            return held or pressed_edge

        # PRESS: an edge arms one jump, kept until used or the key is let go
        if pressed_edge:
            self._armed = True
        elif not held:
            self._armed = False
        return self._armed

    # -------------------- Simulation --------------------

    @staticmethod
    def _sanitize_delta(delta_ms) -> float:
        try:
            delta = float(delta_ms)
        except (TypeError, ValueError):
            raise TypeError(f"delta_ms must be a number, got {delta_ms!r}") from None
        if not math.isfinite(delta) or delta < 0.0:
            logger.warning("step(): clamping invalid delta_ms=%r to 0", delta_ms)
            return 0.0
        return delta

    def step(self, delta_ms: float, jump_held: Optional[bool] = None) -> bool:
        """
        Advance one frame. Returns False (and changes nothing) unless PLAYING.
        jump_held=None uses the flag buffered by jump_pressed()/jump_released().
        """
        if self.phase is not Phase.PLAYING:
            logger.debug("step() ignored in phase %s", self.phase.value)
            return False

        cfg = self.config
        delta = self._sanitize_delta(delta_ms)
        held = self._held if jump_held is None else bool(jump_held)

        # 1) timers
        self.elapsed_ms += delta
        self.frame += 1
        now = self.elapsed_ms
        self.status.expire(now)

        # 2) physics
        if self._wants_jump(held) and self.cat.try_jump():
            self._armed = False
        self.cat.update_physics()

        # 3) move + cull, 4) spawn
        self.level.scroll(self.speed)
        self.level.maybe_spawn()

        # 5) collisions
        report = resolve_collisions(self.cat.hitbox(cfg.hitbox_inset), self.level,
                                    self.status.invincible, cfg.hitbox_inset)
        if report.hit_obstacle is not None:
            self.lives -= 1
            self.obstacles_hit += 1
            self.status.grant_invincibility(now, cfg.invincibility_ms)
            self.status.trigger(CatAnimation.HIT, now, cfg.hit_anim_ms)
            logger.debug("hit obstacle #%d, lives=%d", report.hit_obstacle.id, self.lives)
        if report.fish_collected:
            self.score += cfg.points_per_fish * report.fish_collected
            self.fish_collected += report.fish_collected
            self.status.trigger(CatAnimation.COLLECTING, now, cfg.collect_anim_ms)

        # 6) score, 7) speed
        self.score += cfg.points_per_second * delta / 1000.0
        self.speed = min(cfg.max_game_speed, self.speed + self.preset.speed_increase_rate)

        if self.lives <= 0:
            self.lives = 0
            self.phase = Phase.GAME_OVER
            self.status.fall()
            logger.info("game over: score=%d frames=%d", int(self.score), self.frame)
        return True

    # -------------------- Render boundary --------------------

    def snapshot(self) -> Snapshot:
        c, s = self.cat, self.status
        return Snapshot(
            phase=self.phase,
            difficulty=self.difficulty,
            score=self.score,
            lives=self.lives,
            speed=self.speed,
            elapsed_ms=self.elapsed_ms,
            frame=self.frame,
            cat=CatPose(x=c.x, y=c.y, vy=c.vy, width=c.width, height=c.height,
                        jumping=c.jumping, invincible=s.invincible, animation=s.animation),
            obstacles=tuple(ObstacleView(o.id, o.x, o.width, o.height) for o in self.level.obstacles),
            fishes=tuple(FishView(f.id, f.x, f.y, f.width, f.height) for f in self.level.fishes),
        )
