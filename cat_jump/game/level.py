# cat_jump/game/level.py
from __future__ import annotations
import itertools
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .config import DifficultyPreset, EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Box:
    """Axis-aligned box in world space (x to the right, y up from the ground)."""
    left: float
    bottom: float
    right: float
    top: float

    def overlaps(self, other: "Box") -> bool:
        # strict on all four sides: shared edges are not a hit
        return (self.left < other.right and
                self.right > other.left and
                self.bottom < other.top and
                self.top > other.bottom)


@dataclass
class Obstacle:
    """A bush standing on the ground."""
    id: int
    x: float
    width: float
    height: float

    def hitbox(self, inset: float) -> Box:
        return Box(self.x, inset, self.x + self.width - inset, self.height)


@dataclass
class Fish:
    """A collectible floating in one of the fish lanes."""
    id: int
    x: float
    y: float        # lane height above ground
    width: float
    height: float

    def hitbox(self) -> Box:
        return Box(self.x, self.y, self.x + self.width, self.y + self.height)


class LevelGen:
    """
    Endless ribbon of bushes (and the odd fish behind them) scrolling left.
    Entities are kept in spawn order; culling rebuilds the lists.
    """
    def __init__(self, preset: DifficultyPreset, config: EngineConfig, rng: random.Random):
        self.preset = preset
        self.config = config
        self.rng = rng
        self.obstacles: List[Obstacle] = []
        self.fishes: List[Fish] = []
        self._ids = itertools.count(1)

    def clear(self):
        self.obstacles = []
        self.fishes = []
        self._ids = itertools.count(1)

    def scroll(self, speed: float):
        """Move everything left by `speed`, then drop what is fully off the left edge."""
        for o in self.obstacles:
            o.x -= speed
        for f in self.fishes:
            f.x -= speed

        self.obstacles = [o for o in self.obstacles if o.x + o.width > 0]
        self.fishes = [f for f in self.fishes if f.x + f.width > 0]

    def _should_spawn(self) -> bool:
        if not self.obstacles:
            return True
        return self.obstacles[-1].x < self.config.width - self.preset.min_spawn_gap

    def maybe_spawn(self) -> Optional[Obstacle]:
        """Append a bush once the last one has scrolled far enough in. Returns it, if any."""
        if not self._should_spawn():
            return None

        cfg, p = self.config, self.preset
        last_x = self.obstacles[-1].x if self.obstacles else 0.0
        gap = p.min_spawn_gap + self.rng.random() * (p.max_spawn_gap - p.min_spawn_gap)
        # never spawn on-screen, even after a long frame
        new_x = max(cfg.width, last_x + gap)

        obstacle = Obstacle(id=next(self._ids), x=new_x,
                            width=cfg.obstacle_w, height=cfg.obstacle_h)
        self.obstacles.append(obstacle)

        if self.rng.random() < cfg.fish_spawn_chance:
            lane = self.rng.choice(cfg.fish_lanes)
            fish = Fish(id=next(self._ids), x=new_x + cfg.obstacle_w + cfg.fish_margin,
                        y=float(lane), width=cfg.fish_w, height=cfg.fish_h)
            self.fishes.append(fish)
            logger.debug("spawned obstacle #%d at x=%.1f with fish #%d (lane %.0f)",
                         obstacle.id, new_x, fish.id, lane)
        else:
            logger.debug("spawned obstacle #%d at x=%.1f", obstacle.id, new_x)
        return obstacle

    def remove_obstacle(self, obstacle_id: int):
        self.obstacles = [o for o in self.obstacles if o.id != obstacle_id]
