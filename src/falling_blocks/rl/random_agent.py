from __future__ import annotations

import argparse

import gymnasium as gym

import falling_blocks.env  # noqa: F401
from falling_blocks.utils.logging import setup_logger


def run_random(steps: int = 5000, seed: int | None = None) -> float:
    logger = setup_logger(name="falling_blocks.random_agent")
    env = gym.make("FallingBlocks-10x16-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d ended after %d pieces", episodes, info["pieces_placed"])
            obs, info = env.reset()
    env.close()
    logger.info("random agent cleared %d rows in %d steps", int(total_reward), steps)
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=5000)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
