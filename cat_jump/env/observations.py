# cat_jump/env/observations.py
from __future__ import annotations
from typing import List, Optional
import numpy as np

from cat_jump.game.config import EngineConfig
from cat_jump.game.engine import Snapshot

OBS_DIM = 9
# Highest point of a full jump: v + (v-g) + ... ≈ v^2 / (2|g|), with a bit of headroom
MAX_JUMP_Y = 200.0

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_dx(x: Optional[float], cat_x: float, width: float) -> float:
    """Distance ahead of the cat, in [0,1] over one screen width; 1.0 = nothing ahead."""
    if x is None:
        return 1.0
    return _clamp01((x - cat_x) / float(width))

def build_observation(snap: Snapshot, config: Optional[EngineConfig] = None) -> np.ndarray:
    """
    Returns a fixed (9,) float32 vector:
      [ y_norm, vy_norm, speed_norm, invincible,
        obstacle1_dx, obstacle2_dx, fish_dx, fish_lane, lives_norm ]
    - vy_norm in [-1,1], everything else in [0,1]
    - only entities whose right edge is still ahead of the cat are looked at
    - scales come from `config` (the engine's), defaults when omitted
    """
    cfg = config or EngineConfig()
    cat = snap.cat
    y_norm = _clamp01(cat.y / MAX_JUMP_Y)
    vy_norm = max(-1.0, min(1.0, cat.vy / cfg.jump_strength))
    speed_norm = _clamp01(snap.speed / cfg.max_game_speed)
    invincible = 1.0 if cat.invincible else 0.0

    ahead: List[float] = [o.x for o in snap.obstacles if o.x + o.width > cfg.cat_x]
    obs1 = _norm_dx(ahead[0] if len(ahead) > 0 else None, cfg.cat_x, cfg.width)
    obs2 = _norm_dx(ahead[1] if len(ahead) > 1 else None, cfg.cat_x, cfg.width)

    fish = next((f for f in snap.fishes if f.x + f.width > cfg.cat_x), None)
    if fish is None:
        fish_dx, fish_lane = 1.0, 0.0
    else:
        fish_dx = _norm_dx(fish.x, cfg.cat_x, cfg.width)
        fish_lane = _clamp01(fish.y / max(max(cfg.fish_lanes), cfg.cat_h))

    lives_norm = _clamp01(snap.lives / float(cfg.initial_lives))

    return np.asarray([y_norm, vy_norm, speed_norm, invincible,
                       obs1, obs2, fish_dx, fish_lane, lives_norm], dtype=np.float32)
