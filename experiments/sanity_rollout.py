# /experiments/sanity_rollout.py
"""
Sanity rollouts for CatJumpEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds and difficulties
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact replay

Usage examples (from repo root):
  # Both policies over 20 default seeds on Medium, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Heuristic only, every difficulty, custom seeds, keep action traces:
  python -m experiments.sanity_rollout --policies heuristic --difficulties Easy,Medium,Hard --seeds 111,222 --save-traces
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import List, Tuple

import numpy as np

from cat_jump.env.cj_env import CatJumpEnv
from cat_jump.game.config import parse_difficulty

logger = logging.getLogger(__name__)


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, jump_prob: float = 0.1):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < jump_prob)
    return act

def tiny_heuristic_policy_init(trigger: float = 0.12):
    """
    Very small rule: hold jump while the nearest bush is closer than `trigger`
    (fraction of a screen width) and the cat is on the ground.
    """
    def act(obs: np.ndarray) -> int:
        y_norm, next_bush = obs[0], obs[4]
        return 1 if (y_norm <= 0.0 and 0.0 < next_bush < trigger) else 0
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    difficulty: str,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, float, int, int, bool, bool]:
    """
    Returns: (ep_len, ret_sum, score, hits, fish, terminated, truncated)
    """
    env = CatJumpEnv(difficulty=difficulty, frame_skip=frame_skip)

    if policy_name == "random":
        policy = random_policy_init(10_000 + seed)
    elif policy_name == "heuristic":
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name / difficulty
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    return (ep_len, ret_sum, float(info.get("score", 0.0)), int(info.get("hits", 0)),
            int(info.get("fish", 0)), bool(term), bool(trunc))


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--difficulties", type=str, default="Medium",
                    help="Comma-separated difficulties (Easy, Medium, Hard)")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim frames per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save action sequences for replay")
    ap.add_argument("--log-level", type=str, default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))  # 20 fixed eval seeds by default

    # fail fast on a typo before any episode runs
    difficulties = [parse_difficulty(d).value for d in args.difficulties.split(",") if d.strip()]

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "policy_name", "difficulty", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "score", "hits", "fish",
        "terminated", "truncated",
    ]
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    logger.info("Running policies=%s on %d seeds x %s", to_run, len(seeds), difficulties)
    print(f"Writing summaries to {episodes_csv}")

    for policy_name in to_run:
        for difficulty in difficulties:
            for seed in seeds:
                ep_len, ret_sum, score, hits, fish, terminated, truncated = run_one_episode(
                    policy_name=policy_name,
                    seed=seed,
                    difficulty=difficulty,
                    frame_skip=args.frame_skip,
                    steps_limit=args.steps,
                    save_traces=args.save_traces,
                    out_dir=out_dir,
                )
                write_episode_row(episodes_csv, header, [
                    "CatJumpEnv", policy_name, difficulty, seed, args.frame_skip,
                    ep_len, f"{ret_sum:.2f}", f"{score:.2f}", hits, fish,
                    int(terminated), int(truncated),
                ])
                print(f"[{policy_name}/{difficulty}] seed={seed}  len={ep_len}  score={score:.1f}  "
                      f"hits={hits} fish={fish}  term={terminated} trunc={truncated}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
