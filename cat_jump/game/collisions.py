# cat_jump/game/collisions.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from .level import Box, Fish, LevelGen, Obstacle


@dataclass(frozen=True)
class CollisionReport:
    hit_obstacle: Optional[Obstacle] = None
    fish_collected: int = 0


def first_obstacle_hit(cat_box: Box, obstacles: List[Obstacle], inset: float) -> Optional[Obstacle]:
    """First bush (in spawn order) whose hitbox overlaps the cat, or None."""
    for o in obstacles:
        if cat_box.overlaps(o.hitbox(inset)):
            return o
    return None


def split_fish(cat_box: Box, fishes: List[Fish]):
    """Returns (kept, collected), both in spawn order."""
    kept: List[Fish] = []
    collected: List[Fish] = []
    for f in fishes:
        (collected if cat_box.overlaps(f.hitbox()) else kept).append(f)
    return kept, collected


def resolve_collisions(cat_box: Box, level: LevelGen, invincible: bool, inset: float) -> CollisionReport:
    """
    Removes at most one hit bush (none while invincible) and every overlapping fish
    from `level`. Lives, score and status are applied by the caller.
    """
    hit = None
    if not invincible:
        hit = first_obstacle_hit(cat_box, level.obstacles, inset)
        if hit is not None:
            level.remove_obstacle(hit.id)

    level.fishes, collected = split_fish(cat_box, level.fishes)
    return CollisionReport(hit_obstacle=hit, fish_collected=len(collected))
