# cat_jump/tests/test_env.py
"""
Quick tests for CatJumpEnv (Gymnasium environment) and its observation vector.

Usage (from repo root):
  python -m pytest cat_jump/tests/test_env.py
  python -m cat_jump.tests.test_env --steps 500
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from cat_jump.env.cj_env import CatJumpEnv
from cat_jump.env.observations import OBS_DIM, build_observation
from cat_jump.game.config import EngineConfig
from cat_jump.game.engine import CatJumpEngine
from cat_jump.game.level import Fish, Obstacle


def test_api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = CatJumpEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = CatJumpEnv(frame_skip=frame_skip)
    env.action_space.seed(seed)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed and info["lives"] == 3

        for t in range(steps):
            obs, r, term, trunc, info = env.step(env.action_space.sample())
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term:
                assert info["lives"] == 0
            if term or trunc:
                break
    finally:
        env.close()


def test_determinism(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = CatJumpEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.array_equal(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def test_time_limit_truncates() -> None:
    env = CatJumpEnv(frame_skip=6, time_limit_seconds=1.0)   # 10 decisions
    try:
        env.reset(seed=5)
        trunc = False
        n = 0
        while not trunc:
            _, _, term, trunc, _ = env.step(0)
            assert not term
            n += 1
        assert n == 10
    finally:
        env.close()


def test_reset_options_pick_difficulty() -> None:
    env = CatJumpEnv(difficulty="Easy")
    try:
        _, info = env.reset(seed=1)
        assert info["difficulty"] == "Easy"
        _, info = env.reset(seed=1, options={"difficulty": "hard"})
        assert info["difficulty"] == "Hard"
    finally:
        env.close()


def test_observation_layout() -> None:
    eng = CatJumpEngine(seed=1)
    eng.start("Easy")
    obs = build_observation(eng.snapshot())
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_DIM,)
    # nothing spawned yet: sentinels
    assert obs[4] == 1.0 and obs[5] == 1.0 and obs[6] == 1.0 and obs[7] == 0.0
    assert obs[8] == 1.0

    eng.level.obstacles = [Obstacle(1, 30.0, 45, 45), Obstacle(2, 450.0, 45, 45), Obstacle(3, 850.0, 45, 45)]
    eng.level.fishes = [Fish(4, 545.0, 90.0, 35, 20)]
    obs = build_observation(eng.snapshot())
    # bush 1 (right edge 75) still overlaps the cat's column: distance clamps to 0
    assert obs[4] == 0.0
    assert np.isclose(obs[5], (450.0 - 50.0) / 800.0)
    assert np.isclose(obs[6], (545.0 - 50.0) / 800.0)
    assert np.isclose(obs[7], 1.0)

    # jump apex stays inside [0,1]
    for _ in range(25):
        eng.step(16, jump_held=True)
        o = build_observation(eng.snapshot())
        assert 0.0 <= o[0] <= 1.0 and -1.0 <= o[1] <= 1.0


def test_lives_scale_follows_config() -> None:
    env = CatJumpEnv(config=EngineConfig(initial_lives=5))
    try:
        obs, info = env.reset(seed=3)
        assert info["lives"] == 5 and np.isclose(obs[8], 1.0)
        env.engine.lives = 4
        assert np.isclose(env._get_obs()[8], 0.8)
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim frames per decision step")
    args = ap.parse_args()

    try:
        test_api_check(frame_skip=args.frame_skip)
        print("✓ API check ok")
        test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        print("✓ Smoke test ok")
        test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        print("✓ Determinism ok")
        test_time_limit_truncates()
        test_reset_options_pick_difficulty()
        test_observation_layout()
        test_lives_scale_follows_config()
        print("✓ Env helpers ok")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
