#!/usr/bin/env python3
"""
Minefield - command line demo.

Usage:
    python main.py demo [--games N] [--seed S] [--delay D] [--quiet]
"""
import argparse
import logging
import os
import time
from typing import Optional

import numpy as np

from minefield import DEFAULT_CONFIG, MinefieldEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def pick_random_cell(rng: np.random.Generator, mask: np.ndarray) -> int:
    """Choose a hidden cell uniformly at random."""
    return int(rng.choice(np.flatnonzero(mask)))


def demo(
    games: int = 5,
    seed: Optional[int] = None,
    delay: float = 0.2,
    quiet: bool = False,
) -> None:
    """Auto-play games with random clicks and report times."""
    env = MinefieldEnv(config=DEFAULT_CONFIG, render_mode="ansi")
    rng = np.random.default_rng(seed)
    wins = 0

    for game in range(games):
        obs, info = env.reset(seed=None if seed is None else seed + game)
        done = False

        while not done:
            action = pick_random_cell(rng, env.get_action_mask())
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

            if not quiet:
                clear_screen()
                print(f"=== Game {game + 1}/{games} | Step {info['steps']} ===")
                print(f"Time: {info['elapsed_time']:.2f}s\n")
                print(env.render())
                time.sleep(delay)

        if info["phase"] == "WON":
            wins += 1
        best = info["best_time"]
        best_str = f"{best:.2f}s" if best is not None else "-"
        print(
            f"Game {game + 1}: {info['phase']} in {info['elapsed_time']:.2f}s "
            f"(best {best_str})"
        )

    print(f"\n=== Final: {wins}/{games} wins ===")


def main() -> None:
    """Parse arguments and run command."""
    parser = argparse.ArgumentParser(description="Minefield board engine")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    demo_parser = subparsers.add_parser("demo", help="Watch random clicks play")
    demo_parser.add_argument("--games", type=int, default=5, help="Number of games")
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    demo_parser.add_argument("--delay", type=float, default=0.2, help="Delay between moves")
    demo_parser.add_argument("--quiet", action="store_true", help="Only print results")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "demo":
        demo(games=args.games, seed=args.seed, delay=args.delay, quiet=args.quiet)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
