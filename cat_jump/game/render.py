# cat_jump/game/render.py
from __future__ import annotations
from typing import Optional
import pygame

from .config import (
    WIDTH, HEIGHT, GROUND_HEIGHT,
    COLOR_SKY, COLOR_GROUND, COLOR_STRIPE, COLOR_FG, COLOR_CAT,
    COLOR_BUSH, COLOR_FISH, COLOR_HEART,
)
from .engine import Snapshot
from .status import CatAnimation

GROUND_Y = HEIGHT - GROUND_HEIGHT   # screen y of the ground line


def to_screen(x: float, y: float, w: float, h: float) -> pygame.Rect:
    """World box (y up from the ground) -> screen rect (y down)."""
    return pygame.Rect(int(x), int(GROUND_Y - y - h), int(w), int(h))


def draw_background(surf: pygame.Surface, frame: int = 0, speed: float = 0.0):
    surf.fill(COLOR_SKY)
    pygame.draw.rect(surf, COLOR_GROUND, (0, GROUND_Y, WIDTH, GROUND_HEIGHT))
    # scrolling stripes so the ground reads as moving
    offset = int(frame * speed) % 40
    for x in range(-offset, WIDTH, 40):
        pygame.draw.rect(surf, COLOR_STRIPE, (x, GROUND_Y + GROUND_HEIGHT // 2, 20, GROUND_HEIGHT // 2))


def draw_snapshot(surf: pygame.Surface, snap: Snapshot,
                  font: Optional[pygame.font.Font] = None, tick: Optional[int] = None):
    """
    Draw one frame: ground, bushes, fish, cat and the HUD.
    `tick` is the host's frame counter (keeps effects moving after game over).
    """
    tick = snap.frame if tick is None else tick
    draw_background(surf, snap.frame, snap.speed)

    for o in snap.obstacles:
        pygame.draw.ellipse(surf, COLOR_BUSH, to_screen(o.x, 0.0, o.width, o.height))
    for f in snap.fishes:
        pygame.draw.ellipse(surf, COLOR_FISH, to_screen(f.x, f.y, f.width, f.height))

    cat = snap.cat
    rect = to_screen(cat.x, cat.y, cat.width, cat.height)
    anim = cat.animation
    if anim is CatAnimation.HIT:
        rect.x += (-4, 4, -6, 6)[tick % 4]
    elif anim is CatAnimation.COLLECTING:
        rect.inflate_ip(6, 6)
    elif anim is CatAnimation.FALLING:
        rect.y += min(200, max(0, tick - snap.frame) * 4)

    # blink while invincible
    visible = not (cat.invincible and anim is CatAnimation.DEFAULT and (tick // 6) % 2)
    if visible:
        pygame.draw.rect(surf, COLOR_CAT, rect, border_radius=12)

    for i in range(snap.lives):
        pygame.draw.circle(surf, COLOR_HEART, (24 + i * 28, 24), 10)
    if font is not None:
        txt = font.render(f"Score: {snap.display_score}", True, COLOR_FG)
        surf.blit(txt, (WIDTH - txt.get_width() - 16, 12))
