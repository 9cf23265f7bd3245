# cat_jump/game/status.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class CatAnimation(str, Enum):
    DEFAULT = "default"
    HIT = "hit"
    COLLECTING = "collecting"
    FALLING = "falling"     # game over, never reverts


@dataclass
class StatusTimers:
    """
    Transient cat states with auto-expiry, checked at the top of each step.
    Invincibility is tracked on its own, next to the animation.
    """
    animation: CatAnimation = CatAnimation.DEFAULT
    animation_end_ms: float = 0.0
    invincible: bool = False
    invincible_end_ms: float = 0.0

    def reset(self):
        self.animation = CatAnimation.DEFAULT
        self.animation_end_ms = 0.0
        self.invincible = False
        self.invincible_end_ms = 0.0

    def expire(self, now_ms: float):
        if self.invincible and now_ms > self.invincible_end_ms:
            self.invincible = False

        if self.animation not in (CatAnimation.DEFAULT, CatAnimation.FALLING) and now_ms > self.animation_end_ms:
            self.animation = CatAnimation.DEFAULT

    def trigger(self, animation: CatAnimation, now_ms: float, duration_ms: float):
        if self.animation is CatAnimation.FALLING:
            return
        self.animation = animation
        self.animation_end_ms = now_ms + duration_ms

    def grant_invincibility(self, now_ms: float, duration_ms: float):
        self.invincible = True
        self.invincible_end_ms = now_ms + duration_ms

    def fall(self):
        self.animation = CatAnimation.FALLING
