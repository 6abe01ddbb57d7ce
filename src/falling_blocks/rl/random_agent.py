from __future__ import annotations

import argparse
from typing import List, Optional

import gymnasium as gym

import falling_blocks.env  # noqa: F401


def run_random(steps: int = 2000, seed: Optional[int] = None) -> List[int]:
    """Play random actions and return the score of every finished episode."""
    env = gym.make("FallingBlocks-10x20-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    scores: List[int] = []
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            scores.append(int(info["score"]))
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    print(f"Finished episodes: {len(scores)}  scores: {scores}")
    return scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
