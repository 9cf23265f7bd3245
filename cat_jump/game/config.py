# cat_jump/game/config.py
from __future__ import annotations
import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Tuple, Union

# --- Display ---
WIDTH = 800
HEIGHT = 400
GROUND_HEIGHT = 40
FPS = 60

# --- Cat ---
CAT_X = 50                  # cat's fixed x (world scrolls left)
CAT_W = 60
CAT_H = 55

# --- Physics (per frame, y is height above ground) ---
GRAVITY = -0.8
JUMP_STRENGTH = 17.0
MAX_GAME_SPEED = 15.0       # px per frame

# --- Obstacles / fish ---
OBSTACLE_W = 45
OBSTACLE_H = 45
FISH_W = 35
FISH_H = 20
FISH_SPAWN_CHANCE = 0.4
FISH_LANES: Tuple[float, ...] = (30.0, 90.0)
FISH_MARGIN = 50            # gap between a bush and the fish behind it
HITBOX_INSET = 10           # forgiving hitboxes (right + underside)

# --- Scoring / lives ---
INITIAL_LIVES = 3
POINTS_PER_SECOND = 1.0
POINTS_PER_FISH = 10.0
INVINCIBILITY_MS = 2000.0
HIT_ANIM_MS = 500.0
COLLECT_ANIM_MS = 500.0

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_SKY = (135, 206, 235)
COLOR_GROUND = (244, 162, 97)
COLOR_STRIPE = (231, 111, 81)
COLOR_FG = (255, 255, 255)
COLOR_CAT = (250, 160, 60)
COLOR_BUSH = (46, 125, 50)
COLOR_FISH = (80, 150, 230)
COLOR_HEART = (230, 57, 70)
COLOR_OVERLAY = (0, 0, 0, 128)


class ConfigError(ValueError):
    """Raised for an unknown difficulty or an unusable engine configuration."""


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class JumpMode(str, Enum):
    HOLD = "hold"     # held key jumps again on every landing
    PRESS = "press"   # each jump needs a fresh key press


@dataclass(frozen=True)
class DifficultyPreset:
    initial_speed: float
    speed_increase_rate: float   # added to speed every frame
    min_spawn_gap: float
    max_spawn_gap: float


DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultyPreset] = {
    Difficulty.EASY: DifficultyPreset(
        initial_speed=4.0, speed_increase_rate=0.0003,
        min_spawn_gap=400.0, max_spawn_gap=800.0,
    ),
    Difficulty.MEDIUM: DifficultyPreset(
        initial_speed=5.0, speed_increase_rate=0.0005,
        min_spawn_gap=350.0, max_spawn_gap=700.0,
    ),
    Difficulty.HARD: DifficultyPreset(
        initial_speed=6.5, speed_increase_rate=0.0007,
        min_spawn_gap=300.0, max_spawn_gap=600.0,
    ),
}


def parse_difficulty(value: Union[Difficulty, str]) -> Difficulty:
    """Accept a Difficulty, its name ("EASY") or its value ("Easy"), case-insensitive."""
    if isinstance(value, Difficulty):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for d in Difficulty:
            if key in (d.value.lower(), d.name.lower()):
                return d
    choices = ", ".join(d.value for d in Difficulty)
    raise ConfigError(f"Unknown difficulty {value!r} (expected one of: {choices})")


@dataclass
class EngineConfig:
    """
    Every fixed engine constant, defaulting to the module values above.
    Hosts override fields at construction time, e.g. EngineConfig(initial_lives=5).
    """
    width: float = WIDTH
    cat_x: float = CAT_X
    cat_w: float = CAT_W
    cat_h: float = CAT_H
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    max_game_speed: float = MAX_GAME_SPEED
    obstacle_w: float = OBSTACLE_W
    obstacle_h: float = OBSTACLE_H
    fish_w: float = FISH_W
    fish_h: float = FISH_H
    fish_spawn_chance: float = FISH_SPAWN_CHANCE
    fish_lanes: Tuple[float, ...] = FISH_LANES
    fish_margin: float = FISH_MARGIN
    hitbox_inset: float = HITBOX_INSET
    initial_lives: int = INITIAL_LIVES
    points_per_second: float = POINTS_PER_SECOND
    points_per_fish: float = POINTS_PER_FISH
    invincibility_ms: float = INVINCIBILITY_MS
    hit_anim_ms: float = HIT_ANIM_MS
    collect_anim_ms: float = COLLECT_ANIM_MS
    jump_mode: JumpMode = JumpMode.HOLD
    difficulties: Dict[Difficulty, DifficultyPreset] = field(
        default_factory=lambda: dict(DIFFICULTY_SETTINGS)
    )

    def validate(self) -> "EngineConfig":
        positive = ("width", "cat_w", "cat_h", "jump_strength", "max_game_speed",
                    "obstacle_w", "obstacle_h", "fish_w", "fish_h")
        for f in fields(self):
            if f.name in ("fish_lanes", "jump_mode", "difficulties"):
                continue
            if not math.isfinite(getattr(self, f.name)):
                raise ConfigError(f"{f.name} must be finite, got {getattr(self, f.name)!r}")
            if f.name in positive and not getattr(self, f.name) > 0:
                raise ConfigError(f"{f.name} must be > 0, got {getattr(self, f.name)!r}")
        if not self.gravity < 0:
            raise ConfigError(f"gravity must be negative (pulls toward the ground), got {self.gravity!r}")
        if not 0.0 <= self.fish_spawn_chance <= 1.0:
            raise ConfigError(f"fish_spawn_chance must be in [0, 1], got {self.fish_spawn_chance!r}")
        if not self.fish_lanes:
            raise ConfigError("fish_lanes must contain at least one lane")
        if not all(math.isfinite(lane) for lane in self.fish_lanes):
            raise ConfigError(f"fish_lanes must be finite, got {self.fish_lanes!r}")
        if self.initial_lives < 1:
            raise ConfigError(f"initial_lives must be >= 1, got {self.initial_lives!r}")
        if self.hitbox_inset < 0 or self.hitbox_inset >= min(self.cat_w, self.cat_h, self.obstacle_w, self.obstacle_h):
            raise ConfigError(f"hitbox_inset {self.hitbox_inset!r} does not fit inside the sprites")
        for name in ("invincibility_ms", "hit_anim_ms", "collect_anim_ms", "points_per_second", "points_per_fish"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)!r}")
        try:
            self.jump_mode = JumpMode(self.jump_mode)
        except ValueError:
            raise ConfigError(f"Unknown jump_mode {self.jump_mode!r} (expected 'hold' or 'press')") from None
        for d in Difficulty:
            p = self.difficulties.get(d)
            if p is None:
                raise ConfigError(f"missing difficulty preset for {d.value}")
            if not all(math.isfinite(v) for v in (p.initial_speed, p.speed_increase_rate,
                                                  p.min_spawn_gap, p.max_spawn_gap)):
                raise ConfigError(f"{d.value}: preset values must be finite, got {p!r}")
            if p.initial_speed < 0 or p.speed_increase_rate < 0:
                raise ConfigError(f"{d.value}: speeds must be >= 0")
            if p.initial_speed > self.max_game_speed:
                raise ConfigError(
                    f"{d.value}: initial_speed {p.initial_speed!r} exceeds max_game_speed {self.max_game_speed!r}"
                )
            if not 0 < p.min_spawn_gap <= p.max_spawn_gap:
                raise ConfigError(
                    f"{d.value}: need 0 < min_spawn_gap <= max_spawn_gap, "
                    f"got {p.min_spawn_gap!r}..{p.max_spawn_gap!r}"
                )
        return self
