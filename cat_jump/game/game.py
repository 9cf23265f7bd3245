# cat_jump/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_1, K_2, K_3, K_e, K_m, K_h
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT, COLOR_FG, COLOR_OVERLAY,
    Difficulty, EngineConfig, JumpMode, parse_difficulty
)
from .engine import CatJumpEngine, Phase
from .render import draw_background, draw_snapshot

DIFFICULTY_KEYS = {
    K_1: Difficulty.EASY, K_e: Difficulty.EASY,
    K_2: Difficulty.MEDIUM, K_m: Difficulty.MEDIUM,
    K_3: Difficulty.HARD, K_h: Difficulty.HARD,
}

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Cat Jump — playable build")
    p.add_argument("--seed", type=int, default=None,
                   help="Spawn seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--difficulty", type=str, default=None,
                   help="Skip the start screen: Easy, Medium or Hard.")
    p.add_argument("--jump-mode", type=str, default=JumpMode.HOLD.value,
                   choices=[m.value for m in JumpMode],
                   help="hold: keep jumping while SPACE is held; press: one jump per press.")
    p.add_argument("--log-level", type=str, default="WARNING")
    return p.parse_args(argv)

def _overlay(screen, font, big_font, title, lines):
    panel = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
    panel.fill(COLOR_OVERLAY)
    screen.blit(panel, (0, 0))
    t = big_font.render(title, True, COLOR_FG)
    y = HEIGHT // 2 - 60
    screen.blit(t, (WIDTH // 2 - t.get_width() // 2, y))
    y += t.get_height() + 12
    for line in lines:
        s = font.render(line, True, COLOR_FG)
        screen.blit(s, (WIDTH // 2 - s.get_width() // 2, y))
        y += s.get_height() + 6

def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals the engine to randomize
    else:
        launch_seed = args.seed

    engine = CatJumpEngine(config=EngineConfig(jump_mode=JumpMode(args.jump_mode)), seed=launch_seed)
    if args.difficulty:
        engine.start(parse_difficulty(args.difficulty))

    pygame.init()
    pygame.display.set_caption("Cat Jump!")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 22)
    big_font = pygame.font.SysFont("jetbrainsmono", 54, bold=True)

    tick = 0
    game_over_tick = 0
    while True:
        dt_ms = clock.tick(FPS)
        if dt_ms > 1000.0 / 30.0:  # clamp stalls
            dt_ms = 1000.0 / 30.0
        tick += 1

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if engine.phase is Phase.START and event.key in DIFFICULTY_KEYS:
                    engine.start(DIFFICULTY_KEYS[event.key])
                elif engine.phase is Phase.GAME_OVER and event.key in (K_r, K_SPACE):
                    engine.replay()
                elif event.key == K_SPACE:
                    engine.jump_pressed()
            if event.type == pygame.KEYUP and event.key == K_SPACE:
                engine.jump_released()

        if engine.phase is Phase.PLAYING:
            engine.step(dt_ms)
            game_over_tick = tick

        # --- Render ---
        snap = engine.snapshot()
        if snap.phase is Phase.START:
            draw_background(screen)
            _overlay(screen, font, big_font, "Cat Jump!",
                     ["Select a difficulty", "1 Easy    2 Medium    3 Hard"])
        else:
            # keep the fall animation moving after the engine stops stepping
            extra = tick - game_over_tick if snap.phase is Phase.GAME_OVER else 0
            draw_snapshot(screen, snap, font, tick=snap.frame + extra)
            if snap.phase is Phase.GAME_OVER:
                _overlay(screen, font, big_font, "Game Over",
                         [f"Final Score: {snap.display_score}", "Replay (R / SPACE)   Quit (ESC)"])

        pygame.display.flip()

if __name__ == "__main__":
    run()
