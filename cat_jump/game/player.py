# cat_jump/game/player.py
from __future__ import annotations
from dataclasses import dataclass

from .level import Box


@dataclass
class Cat:
    """
    The runner. x is fixed (the world scrolls), y is height above the ground.
    Units are per frame: gravity is added to vy once per step, vy to y once per step.
    """
    x: float
    width: float
    height: float
    gravity: float
    jump_strength: float
    y: float = 0.0
    vy: float = 0.0
    jumping: bool = False

    def reset(self):
        self.y = 0.0
        self.vy = 0.0
        self.jumping = False

    def try_jump(self) -> bool:
        """Jump only from the ground (no double jump). Returns True if performed."""
        if self.jumping:
            return False
        self.jumping = True
        self.vy = self.jump_strength
        return True

    def update_physics(self):
        """Semi-implicit Euler step, then land on the ground."""
        self.vy += self.gravity
        self.y += self.vy

        if self.y < 0.0:
            self.y = 0.0
            self.vy = 0.0
            self.jumping = False

    def hitbox(self, inset: float) -> Box:
        # inset on the right and underside, like the bush hitboxes
        return Box(self.x, self.y + inset, self.x + self.width - inset, self.y + self.height)
